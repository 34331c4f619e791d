"""
Shared configuration management for the storefront gateway.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.logging import get_logger

DEFAULT_AUTH_PASSKEY = "12345"
DEFAULT_UPSTREAM_BASE_URL = "http://localhost:8080"
DEFAULT_PORT = 8080


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
        populate_by_name=True,
        frozen=True,
    )

    # Environment
    env: str = Field(default="local", validation_alias="GATEWAY_ENV")
    log_level: str = Field(default="info", validation_alias="GATEWAY_LOG_LEVEL")


class GatewayConfig(BaseConfig):
    """Process-wide gateway settings, read once at startup."""

    service_name: str = "gateway"
    host: str = Field(default="0.0.0.0", validation_alias="GATEWAY_HOST")
    port: int = Field(default=DEFAULT_PORT, validation_alias="PORT")

    # Credential compared by the /auth route
    auth_passkey: str = Field(default=DEFAULT_AUTH_PASSKEY, validation_alias="AUTH_PASSKEY")

    # Upstream product/order service
    upstream_base_url: str = Field(
        default=DEFAULT_UPSTREAM_BASE_URL,
        validation_alias="DOTNET_PRODUCTS_API_URL",
    )

    @property
    def uses_default_passkey(self) -> bool:
        return "auth_passkey" not in self.model_fields_set


def report_defaults(config: GatewayConfig) -> None:
    """Log every setting that fell back to its development default."""
    logger = get_logger("gateway.config")
    provided = config.model_fields_set

    if config.uses_default_passkey:
        logger.warning(
            "AUTH_PASSKEY environment variable is not set, using development default passkey",
            default=DEFAULT_AUTH_PASSKEY,
        )
        if config.env != "local":
            logger.error(
                "Development default passkey in use outside local environment",
                env=config.env,
            )

    if "upstream_base_url" not in provided:
        logger.warning(
            "DOTNET_PRODUCTS_API_URL environment variable is not set, using default",
            default=DEFAULT_UPSTREAM_BASE_URL,
        )

    if "port" not in provided:
        logger.warning(
            "PORT environment variable is not set, using default",
            default=DEFAULT_PORT,
        )


def get_config(**overrides) -> GatewayConfig:
    """Build the gateway configuration from the environment."""
    return GatewayConfig(**overrides)

