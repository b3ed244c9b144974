"""
Shared configuration management for the Moment Auth Service.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Token issuance
    jwt_private_key_path: str = Field(default="jwt_private.pem")
    token_issuer: str = Field(default="Auth-Service")
    token_audience: str = Field(default="Moment-Service")
    token_validity_seconds: int = Field(default=7 * 24 * 60 * 60, gt=0)
    token_key_id: Optional[str] = Field(default=None)

    # External user service; unset means the in-memory credential store
    user_service_url: Optional[str] = Field(default=None)
    user_service_timeout: float = Field(default=10.0, gt=0)

    # Observability
    enable_tracing: bool = Field(default=False)
    otel_exporter: str = Field(default="http://localhost:4317")
    enable_console_tracing: bool = Field(default=False)


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str
    port: int
    host: str = "0.0.0.0"

    def __init__(self, service_name: str, port: int, **kwargs):
        super().__init__(service_name=service_name, port=port, **kwargs)


def get_config(service_name: str, port: int, **overrides) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name, port=port, **overrides)
