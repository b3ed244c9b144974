"""
Error types raised by the auth service core.

Every failure surfaces to the immediate caller as one of these; the shared
exception handler turns them into HTTP responses using ``status_code``.
"""

from typing import Any, Dict, Optional

from shared.errors import (
    AuthenticationError,
    ConflictError,
    ExternalServiceError,
    ServiceError,
    ValidationError,
)


# Schema definition errors


class SchemaKindUnrecognized(ServiceError):
    """A schema node is neither a leaf nor a well-formed group."""

    def __init__(self, node: Any, schema_name: Optional[str] = None):
        super().__init__(
            "SCHEMA_KIND_UNRECOGNIZED",
            f"Schema node of type {type(node).__name__} is not recognized",
            details={"schema": schema_name, "node_type": type(node).__name__},
        )


class DuplicateFieldName(ServiceError):
    """A leaf name appears more than once in a flattened schema."""

    def __init__(self, name: str, schema_name: Optional[str] = None):
        super().__init__(
            "DUPLICATE_FIELD_NAME",
            f"Field {name!r} is declared more than once",
            details={"schema": schema_name, "field": name},
        )


# Client-shape errors


class FieldCountMismatch(ValidationError):
    """Request carries a different number of fields than the schema expects."""

    def __init__(self, received: int, expected: int, details: Optional[Dict[str, Any]] = None):
        self.received = received
        self.expected = expected
        super().__init__(
            "FIELD_COUNT_MISMATCH",
            f"Request has {received} fields, expected {expected}",
            details={"received": received, "expected": expected, **(details or {})},
        )


class FieldMissingOrEmpty(ValidationError):
    """A required field is absent or blank."""

    def __init__(self, field: str, details: Optional[Dict[str, Any]] = None):
        self.field = field
        super().__init__(
            "FIELD_MISSING_OR_EMPTY",
            f"Field {field!r} is missing or empty",
            details={"field": field, **(details or {})},
        )


# Credential errors


class SubjectAlreadyExists(ConflictError):
    """Subject creation collided with an existing subject."""

    def __init__(self, subject_id: str):
        self.subject_id = subject_id
        super().__init__("Subject already exists", details={"subject_id": subject_id})
        self.code = "SUBJECT_ALREADY_EXISTS"


class InvalidCredentials(AuthenticationError):
    """Subject/secret pair was rejected."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)
        self.code = "UNAUTHORIZED"


class CredentialGatewayError(ExternalServiceError):
    """The credential store failed for an operational reason."""

    def __init__(self, message: str = "Credential gateway failure", details: Optional[Dict[str, Any]] = None):
        super().__init__("credential-gateway", message, details)
        self.code = "CREDENTIAL_GATEWAY_ERROR"


# Token issuance errors


class KeyUnavailable(ServiceError):
    """The signing key cannot be loaded or is malformed."""

    def __init__(self, message: str = "Signing key unavailable", details: Optional[Dict[str, Any]] = None):
        super().__init__("KEY_UNAVAILABLE", message, details)


class SigningFailed(ServiceError):
    """The signing operation itself failed."""

    def __init__(self, message: str = "Token signing failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("SIGNING_FAILED", message, details)
