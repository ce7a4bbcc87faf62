"""Application configuration using Pydantic Settings"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).parent.parent.parent / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Twitch OAuth (empty values start the server degraded)
    twitch_client_id: str = Field(default="", description="Twitch OAuth Client ID")
    twitch_client_secret: str = Field(default="", description="Twitch OAuth Client Secret")
    twitch_redirect_uri: str = Field(
        default="http://localhost:5173/auth/twitch",
        description="Redirect URI registered for the authorization-code flow",
    )

    # CORS
    frontend_url: str = Field(default="", description="Production frontend origin")
    dev_origins: list[str] = Field(
        default=["http://localhost:5173", "http://localhost:5174"],
        description="Local development origins",
    )

    # Stream listing
    stream_language: str = Field(default="es", description="Language filter for live streams")
    stream_limit: int = Field(default=10, description="Maximum number of streams returned")

    # Outbound HTTP
    http_timeout: float | None = Field(
        default=None, description="Timeout for Twitch requests in seconds, None disables it"
    )

    # Environment
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Logging level")

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3001, description="Server port")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            logger.warning(f"Invalid log level '{v}', defaulting to INFO")
            return "INFO"
        return v_upper

    @field_validator("stream_limit")
    @classmethod
    def validate_stream_limit(cls, v: int) -> int:
        # Helix accepts 1..100 for `first`
        if not 1 <= v <= 100:
            raise ValueError("stream_limit must be between 1 and 100")
        return v

    @property
    def cors_origins(self) -> list[str]:
        """Get CORS allowed origins, skipping unset entries"""
        return [origin for origin in [*self.dev_origins, self.frontend_url] if origin]

    @property
    def has_twitch_credentials(self) -> bool:
        return bool(self.twitch_client_id and self.twitch_client_secret)

    @property
    def is_test(self) -> bool:
        return self.environment.lower() == "test"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
