"""
Request validation package.

Decides whether an inbound form body carries exactly the fields a schema
expects:

- The number of fields must equal the number of schema leaves.
- Every expected field must be present and non-empty.

Values are never coerced; they stay opaque strings.
"""

from .request_validator import RequestFields, RequestValidator, check_fields, validate_request

__all__ = ["RequestFields", "RequestValidator", "check_fields", "validate_request"]
