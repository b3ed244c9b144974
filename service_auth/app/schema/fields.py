"""
Request schema declarations and flattening.

A schema is an ordered tree: ``Leaf`` nodes name a single expected form
value, ``Group`` nodes nest another set of fields whose leaves are inlined
into the parent. Schemas are declared once at import time and never
inferred from model classes at request time.
"""

from dataclasses import dataclass
from typing import List, Sequence, Set, Tuple, Union

from ..errors import DuplicateFieldName, SchemaKindUnrecognized


@dataclass(frozen=True)
class Leaf:
    """Field mapped to a single scalar value."""
    name: str


@dataclass(frozen=True)
class Group:
    """Nested set of fields contributing their own leaves."""
    name: str
    children: Tuple["Field", ...]

    def __init__(self, name: str, children: Sequence["Field"]):
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "children", _freeze(children))


@dataclass(frozen=True)
class Schema:
    """Named, ordered tree of request fields."""
    name: str
    fields: Tuple["Field", ...]

    def __init__(self, name: str, fields: Sequence["Field"]):
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "fields", _freeze(fields))

    def leaf_names(self) -> List[str]:
        return flatten(self)


Field = Union[Leaf, Group, Schema]


def _freeze(nodes):
    # Keep malformed containers as-is so flatten() can report them
    if isinstance(nodes, (list, tuple)):
        return tuple(nodes)
    return nodes


def flatten(schema: Schema) -> List[str]:
    """Return the leaf field names of ``schema`` in declaration order.

    Traversal is depth-first; a group's leaves are emitted in place of the
    group itself. Raises ``SchemaKindUnrecognized`` for nodes that are not
    leaves or well-formed groups, and ``DuplicateFieldName`` when a leaf
    name repeats anywhere in the tree.
    """
    names: List[str] = []
    seen: Set[str] = set()
    _collect(_children_of(schema, schema.name), schema.name, names, seen)
    return names


def _children_of(node, schema_name: str) -> Tuple:
    children = node.fields if isinstance(node, Schema) else node.children
    if not isinstance(children, tuple):
        raise SchemaKindUnrecognized(node, schema_name)
    return children


def _collect(nodes: Tuple, schema_name: str, names: List[str], seen: Set[str]) -> None:
    for node in nodes:
        if isinstance(node, Leaf):
            if not isinstance(node.name, str) or not node.name:
                raise SchemaKindUnrecognized(node, schema_name)
            if node.name in seen:
                raise DuplicateFieldName(node.name, schema_name)
            seen.add(node.name)
            names.append(node.name)
        elif isinstance(node, (Group, Schema)):
            _collect(_children_of(node, schema_name), schema_name, names, seen)
        else:
            raise SchemaKindUnrecognized(node, schema_name)
