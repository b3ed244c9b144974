"""
Request shape validation for the auth service.
"""

from collections.abc import Mapping
from typing import Any, Dict, Iterator, List, Optional

from shared.logging import get_logger
from ..errors import FieldCountMismatch, FieldMissingOrEmpty
from ..schema import Schema, flatten

logger = get_logger("auth.validation")


class RequestFields(Mapping):
    """Immutable field-name to string-value map for a single request."""

    def __init__(self, values: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(values or {})

    @classmethod
    def from_form(cls, form: Any) -> "RequestFields":
        """Build from a multi-valued form.

        Each key counts once and keeps its first value. Non-string values
        (uploaded files) are stored as empty strings.
        """
        values: Dict[str, str] = {}
        for key, value in form.multi_items():
            if key in values:
                continue
            values[key] = value if isinstance(value, str) else ""
        return cls(values)

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        # Values may hold secrets
        return f"RequestFields(keys={sorted(self._values)})"


def check_fields(fields: Mapping, expected: List[str], schema_name: Optional[str] = None) -> None:
    """Check ``fields`` against an already-flattened list of names.

    The count check is strict equality: unexpected extra fields are
    rejected exactly like missing ones. Blank values count as missing.
    """
    if len(fields) != len(expected):
        logger.info(
            "Request rejected",
            reason="field_count_mismatch",
            schema=schema_name,
            received=len(fields),
            expected=len(expected),
        )
        raise FieldCountMismatch(len(fields), len(expected), details={"schema": schema_name})

    for name in expected:
        if not fields.get(name):
            logger.info(
                "Request rejected",
                reason="field_missing_or_empty",
                schema=schema_name,
                field=name,
            )
            raise FieldMissingOrEmpty(name, details={"schema": schema_name})


def validate_request(fields: Mapping, schema: Schema) -> None:
    """Validate request fields against a schema; raise on rejection."""
    check_fields(fields, flatten(schema), schema.name)


class RequestValidator:
    """Validator bound to one schema, flattened once up front."""

    def __init__(self, schema: Schema):
        self.schema = schema
        self.expected = flatten(schema)

    def validate(self, fields: Mapping) -> None:
        check_fields(fields, self.expected, self.schema.name)
