"""
Credential gateway contract.
"""

from dataclasses import dataclass, field
from typing import Dict, Protocol


@dataclass(frozen=True)
class Credentials:
    """Subject identifier and secret, passed by value into the gateway."""
    subject_id: str
    secret: str = field(repr=False)


class CredentialGateway(Protocol):
    """Owns subject creation and credential verification.

    Both calls are single-shot. Implementations raise
    ``SubjectAlreadyExists``/``InvalidCredentials`` for business outcomes and
    ``CredentialGatewayError`` for anything else; they never retry.
    A gateway may also offer ``check_health``; the health route uses it
    when present.
    """

    async def create_subject(self, credentials: Credentials, profile: Dict[str, str]) -> None: ...

    async def verify_credentials(self, credentials: Credentials) -> None: ...
