"""
Credential gateway package.

The auth service does not store users itself. It delegates subject creation
and credential checks to a gateway:

- client.UserServiceClient talks to the external user service over HTTP.
- memory.InMemoryCredentialGateway keeps subjects in process for local
  runs and tests.
"""

from typing import Optional

from shared.config import ServiceConfig
from .client import UserServiceClient
from .gateway import CredentialGateway, Credentials
from .memory import InMemoryCredentialGateway


def build_credential_gateway(config: ServiceConfig) -> CredentialGateway:
    """Pick the gateway implementation for the configured environment."""
    url: Optional[str] = config.user_service_url
    if url:
        return UserServiceClient(url, timeout=config.user_service_timeout)
    return InMemoryCredentialGateway()


__all__ = [
    "CredentialGateway",
    "Credentials",
    "InMemoryCredentialGateway",
    "UserServiceClient",
    "build_credential_gateway",
]
