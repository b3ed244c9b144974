"""
Auth service for Moment.
"""

from datetime import timedelta
from typing import Optional

from fastapi import Request, Response

from shared.base_service import BaseService
from shared.config import ServiceConfig, get_config
from shared.logging import set_user_context
from shared.tracing import add_span_event, trace_operation
from shared.errors import AuthServiceException, ValidationError
from .errors import FieldCountMismatch
from .schema import AUTHENTICATE_SCHEMA, CREATE_SUBJECT_SCHEMA
from .schema.definitions import EMAIL, PASSWORD, USER_ID
from .tokens import TokenIssuer
from .users import CredentialGateway, Credentials, build_credential_gateway
from .validation import RequestFields, RequestValidator

SERVICE_NAME = "auth"
SERVICE_PORT = 8080
TOKEN_HEADER = "jwt"


class AuthService(BaseService):
    """Auth service implementation."""

    def __init__(self, config: Optional[ServiceConfig] = None,
                 credential_gateway: Optional[CredentialGateway] = None,
                 token_issuer: Optional[TokenIssuer] = None):
        config = config or get_config(SERVICE_NAME, SERVICE_PORT)

        # Signing key is loaded before any route exists
        self.token_issuer = token_issuer or TokenIssuer.from_key_file(
            config.jwt_private_key_path,
            issuer=config.token_issuer,
            audience=config.token_audience,
            validity=timedelta(seconds=config.token_validity_seconds),
            key_id=config.token_key_id,
        )
        self.credential_gateway = credential_gateway or build_credential_gateway(config)
        self.create_validator = RequestValidator(CREATE_SUBJECT_SCHEMA)
        self.authenticate_validator = RequestValidator(AUTHENTICATE_SCHEMA)

        super().__init__(SERVICE_NAME, SERVICE_PORT, config=config)
        self._setup_auth_routes()

    async def _read_fields(self, request: Request, validator: RequestValidator, endpoint: str) -> RequestFields:
        form = await request.form()
        fields = RequestFields.from_form(form)
        try:
            validator.validate(fields)
        except ValidationError as e:
            reason = "field_count_mismatch" if isinstance(e, FieldCountMismatch) else "field_missing_or_empty"
            self.metrics.increment_counter("requests_rejected_total", endpoint=endpoint, reason=reason)
            raise
        return fields

    def _setup_auth_routes(self):
        """Set up auth-specific routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": SERVICE_NAME,
                "message": "Moment - Auth Service",
                "version": "1.0.0"
            }

        @self.app.post("/user/{user}/create", status_code=201)
        async def create_user(user: str, request: Request):
            """Create a subject from form fields UserID, Password and Email."""
            fields = await self._read_fields(request, self.create_validator, "create_user")
            credentials = Credentials(subject_id=fields[USER_ID], secret=fields[PASSWORD])
            set_user_context(credentials.subject_id)

            with trace_operation("credentials.create_subject", subject_id=credentials.subject_id):
                await self.credential_gateway.create_subject(credentials, {"email": fields[EMAIL]})

            self.metrics.record_business_event("subject_created")
            add_span_event("subject_created")
            return Response(status_code=201)

        @self.app.post("/auth")
        async def authenticate(request: Request):
            """Verify UserID/Password and return a signed token in the jwt header."""
            fields = await self._read_fields(request, self.authenticate_validator, "authenticate")
            credentials = Credentials(subject_id=fields[USER_ID], secret=fields[PASSWORD])
            set_user_context(credentials.subject_id)

            with trace_operation("credentials.verify", subject_id=credentials.subject_id):
                await self.credential_gateway.verify_credentials(credentials)

            try:
                with trace_operation("token.issue", subject_id=credentials.subject_id):
                    token = self.token_issuer.issue(credentials.subject_id)
            except AuthServiceException:
                self.metrics.increment_counter("tokens_issued_total", status="error")
                raise

            self.metrics.increment_counter("tokens_issued_total", status="ok")
            self.metrics.record_business_event("token_issued")
            return Response(status_code=200, headers={TOKEN_HEADER: token})

        @self.app.get("/.well-known/jwks.json")
        async def jwks():
            """Public signing key for token consumers."""
            return self.token_issuer.public_jwks()

    async def _check_dependencies(self):
        """Check auth dependencies."""
        check_health = getattr(self.credential_gateway, "check_health", None)
        if check_health is None:
            return {}
        return {"credential_gateway": await check_health()}


def create_app(config: Optional[ServiceConfig] = None,
               credential_gateway: Optional[CredentialGateway] = None,
               token_issuer: Optional[TokenIssuer] = None):
    """Create FastAPI application."""
    service = AuthService(config, credential_gateway, token_issuer)
    return service.app


if __name__ == "__main__":
    service = AuthService()
    service.run()
