"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes gateway credentials and limits
- Validates configuration on startup
- Settings are frozen: read once, never mutated at runtime
"""

from pydantic import Field, field_validator, ValidationInfo
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Injected into the gateway service at construction time.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        frozen=True,
    )

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # BulkSMSBD gateway
    BULKSMS_API_KEY: Optional[str] = Field(
        default=None,
        description="BulkSMSBD API key passed through on every call"
    )
    BULKSMS_SENDER_ID: Optional[str] = Field(
        default=None,
        description="Default sender ID when the caller does not provide one"
    )
    BULKSMS_BASE_URL: str = Field(
        default="http://bulksmsbd.net/api",
        description="BulkSMSBD API base URL"
    )
    BULKSMS_TIMEOUT: float = Field(
        default=30.0,
        description="Outbound request timeout in seconds"
    )

    # Application
    PORT: int = Field(
        default=3000,
        description="Listening port"
    )
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    API_PREFIX: str = Field(
        default="/api",
        description="API route prefix"
    )
    CORS_ORIGINS: list = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    @field_validator("BULKSMS_API_KEY")
    @classmethod
    def validate_api_key(cls, v, info: ValidationInfo):
        """Ensure the gateway key is set in production."""
        if info.data.get("ENVIRONMENT") == "production" and not v:
            raise ValueError("BULKSMS_API_KEY is required in production environment")
        return v

    @field_validator("BULKSMS_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v):
        return v.rstrip("/")

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    @property
    def has_gateway_credentials(self) -> bool:
        return bool(self.BULKSMS_API_KEY and self.BULKSMS_SENDER_ID)


# Global settings instance
settings = Settings()


def validate_settings(config: Optional[Settings] = None):
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    config = config or settings
    errors = []

    if not config.BULKSMS_BASE_URL:
        errors.append("BULKSMS_BASE_URL is required")

    if config.BULKSMS_TIMEOUT <= 0:
        errors.append("BULKSMS_TIMEOUT must be positive")

    # Production-specific validations
    if config.is_production:
        if not config.BULKSMS_API_KEY:
            errors.append("BULKSMS_API_KEY is required in production")
        if not config.BULKSMS_SENDER_ID:
            errors.append("BULKSMS_SENDER_ID is required in production")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
