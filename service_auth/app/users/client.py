"""
HTTP client for the external user service.
"""

import httpx
from typing import Dict, Optional

from shared.logging import get_logger
from ..errors import CredentialGatewayError, InvalidCredentials, SubjectAlreadyExists
from .gateway import Credentials


class UserServiceClient:
    """Credential gateway backed by the user service REST API.

    Failures are mapped straight to typed errors; nothing is retried.
    """

    UNAUTHORIZED_STATUSES = (401, 403, 404)

    def __init__(self, user_service_url: str, timeout: float = 10.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.user_service_url = user_service_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self.logger = get_logger("auth.users.client")

    async def _post(self, path: str, payload: Dict[str, str]) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                return await client.post(f"{self.user_service_url}{path}", json=payload)
        except httpx.HTTPError as e:
            self.logger.error("User service HTTP error", path=path, error=str(e))
            raise CredentialGatewayError(
                "User service unavailable",
                details={"http_error": type(e).__name__}
            )

    async def create_subject(self, credentials: Credentials, profile: Dict[str, str]) -> None:
        """Create a subject in the user service."""
        response = await self._post(
            "/users",
            {"user_id": credentials.subject_id, "password": credentials.secret, **profile}
        )

        if response.status_code in (200, 201):
            return
        if response.status_code == 409:
            raise SubjectAlreadyExists(credentials.subject_id)

        self.logger.error(
            "User service rejected subject creation",
            status_code=response.status_code
        )
        raise CredentialGatewayError(
            f"Unexpected status {response.status_code}",
            details={"status_code": response.status_code}
        )

    async def verify_credentials(self, credentials: Credentials) -> None:
        """Verify a subject's credentials with the user service."""
        response = await self._post(
            "/users/verify",
            {"user_id": credentials.subject_id, "password": credentials.secret}
        )

        if response.status_code in (200, 204):
            return
        if response.status_code in self.UNAUTHORIZED_STATUSES:
            raise InvalidCredentials()

        self.logger.error(
            "User service rejected credential verification",
            status_code=response.status_code
        )
        raise CredentialGatewayError(
            f"Unexpected status {response.status_code}",
            details={"status_code": response.status_code}
        )

    async def check_health(self) -> str:
        try:
            async with httpx.AsyncClient(timeout=5.0, transport=self.transport) as client:
                response = await client.get(f"{self.user_service_url}/health")
            return "ok" if response.status_code == 200 else "error"
        except httpx.HTTPError:
            return "error"
