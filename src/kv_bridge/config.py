"""Configuration management using Pydantic Settings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from KV_BRIDGE_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="KV_BRIDGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Store endpoint
    host: str = "127.0.0.1"
    port: int = Field(default=8098, ge=1, le=65535)
    protocol: Literal["http", "https"] = "http"
    http_prefix: str = "riak"
    mapred_prefix: str = "mapred"
    timeout: float = 30.0

    # Default read quorum for finders (None lets the server decide)
    read_quorum: int | str | None = None

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "console"] = "console"

    @property
    def base_url(self) -> str:
        return f"{self.protocol}://{self.host}:{self.port}"


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
