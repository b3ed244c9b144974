"""
Integration tests for Auth service flow.
"""

import pytest
import httpx
import jwt

from mocks.user_service.server import MockUserService
from service_auth.app.errors import KeyUnavailable
from service_auth.app.main import create_app
from service_auth.app.users import UserServiceClient
from shared.config import get_config
from shared.test_helpers import key_pair_factory, sample_data_factory


AUTH_SERVICE_URL = "http://auth.test"
USER_SERVICE_URL = "http://users.test"


@pytest.fixture(scope="module")
def signing_key():
    return key_pair_factory.rsa_private_key()


@pytest.fixture
def key_path(tmp_path, signing_key):
    return key_pair_factory.write_pem(tmp_path / "jwt_private.pem", signing_key)


@pytest.fixture
def user_service():
    return MockUserService()


@pytest.fixture
def auth_app(monkeypatch, key_path, user_service):
    """Auth app configured from the environment, backed by the mock user service."""
    monkeypatch.setenv("AUTH_JWT_PRIVATE_KEY_PATH", str(key_path))
    monkeypatch.setenv("AUTH_TOKEN_KEY_ID", "integration-key")
    gateway = UserServiceClient(
        USER_SERVICE_URL,
        transport=httpx.ASGITransport(app=user_service.app)
    )
    return create_app(config=get_config("auth", 8080), credential_gateway=gateway)


@pytest.fixture
def subject():
    return sample_data_factory.create_subjects()[0]


class TestAuthFlow:
    """Integration tests for complete auth flow."""

    @pytest.mark.asyncio
    async def test_complete_auth_flow(self, auth_app, user_service, subject):
        """Create a subject, log in and verify the token against the published JWKS."""
        transport = httpx.ASGITransport(app=auth_app)
        async with httpx.AsyncClient(transport=transport, base_url=AUTH_SERVICE_URL) as client:
            # 1. Create subject
            create_response = await client.post(
                f"/user/{subject.user_id}/create",
                data=subject.create_form()
            )
            assert create_response.status_code == 201
            assert user_service.users[subject.user_id]["email"] == subject.email

            # 2. Log in
            auth_response = await client.post("/auth", data=subject.auth_form())
            assert auth_response.status_code == 200
            token = auth_response.headers["jwt"]

            # 3. Verify as a downstream consumer would
            jwks_response = await client.get("/.well-known/jwks.json")
            jwk = jwks_response.json()["keys"][0]
            assert jwt.get_unverified_header(token)["kid"] == jwk["kid"] == "integration-key"

            claims = jwt.decode(
                token,
                jwt.PyJWK(jwk).key,
                algorithms=["RS256"],
                audience="Moment-Service",
                issuer="Auth-Service",
            )
            assert claims["sub"] == subject.user_id
            assert set(claims) == {"iss", "sub", "aud", "iat", "exp"}

    @pytest.mark.asyncio
    async def test_duplicate_and_bad_login(self, auth_app, subject):
        transport = httpx.ASGITransport(app=auth_app)
        async with httpx.AsyncClient(transport=transport, base_url=AUTH_SERVICE_URL) as client:
            await client.post(f"/user/{subject.user_id}/create", data=subject.create_form())

            duplicate = await client.post(f"/user/{subject.user_id}/create", data=subject.create_form())
            assert duplicate.status_code == 409

            bad_login = await client.post(
                "/auth",
                data={"UserID": subject.user_id, "Password": "not-the-password"}
            )
            assert bad_login.status_code == 401
            assert "jwt" not in bad_login.headers

    @pytest.mark.asyncio
    async def test_user_service_outage(self, auth_app, user_service, subject):
        """Outages become server errors, distinct from conflict and unauthorized."""
        user_service.available = False
        transport = httpx.ASGITransport(app=auth_app)
        async with httpx.AsyncClient(transport=transport, base_url=AUTH_SERVICE_URL) as client:
            create_response = await client.post(
                f"/user/{subject.user_id}/create",
                data=subject.create_form()
            )
            auth_response = await client.post("/auth", data=subject.auth_form())
            health_response = await client.get("/health")

        assert create_response.status_code == 500
        assert auth_response.status_code == 500
        assert health_response.json()["dependencies"]["credential_gateway"] == "error"

    def test_missing_key_blocks_startup(self, monkeypatch, tmp_path):
        monkeypatch.setenv("AUTH_JWT_PRIVATE_KEY_PATH", str(tmp_path / "absent.pem"))

        with pytest.raises(KeyUnavailable):
            create_app()

