"""Configuration management using pydantic-settings."""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Console settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Remote API Configuration
    api_base_url: str = Field(default="http://localhost:8080", description="Base URL of the handoff API")
    request_timeout: Optional[float] = Field(default=None, description="Per-request timeout in seconds (None disables it)")

    # Synchronization Configuration
    poll_interval: float = Field(default=3.0, gt=0, description="Seconds between poll ticks")

    # UI Configuration
    max_notifications: int = Field(default=20, ge=1, description="Notifications kept for display")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level")
    log_file: Optional[str] = Field(default=None, description="Log file path")

    def get_api_base_url(self) -> str:
        """Get the API base URL without a trailing slash."""
        return self.api_base_url.rstrip("/")


# Global settings instance
settings = Settings()
