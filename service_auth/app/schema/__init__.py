"""
Request schema package.

Declares the expected shape of each endpoint's form body as an explicit
tree of fields and flattens it into the ordered list of leaf names the
request validator checks against.

- fields: ``Leaf``/``Group``/``Schema`` node types and ``flatten``.
- definitions: the schemas used by the auth routes.
"""

from .fields import Field, Group, Leaf, Schema, flatten
from .definitions import AUTHENTICATE_SCHEMA, CREATE_SUBJECT_SCHEMA

__all__ = [
    "Field",
    "Group",
    "Leaf",
    "Schema",
    "flatten",
    "AUTHENTICATE_SCHEMA",
    "CREATE_SUBJECT_SCHEMA",
]
