"""
Configuration management using pydantic-settings.
Loads from environment variables and ~/.env.local
"""

from functools import lru_cache
from pathlib import Path

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from completion_cli.constants import DEFAULT_ENDPOINT, DEFAULT_TIMEOUT, TOKEN_ENV_VAR
from completion_cli.exceptions import ConfigurationError

_FALSE_VALUES = {"0", "false", "no", "off"}


class Settings(BaseSettings):
    """Client settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=str(Path.home() / ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Credentials
    openai_token: str = ""

    # Logging
    debug: bool = False

    # Transport
    completion_endpoint: str = DEFAULT_ENDPOINT
    completion_timeout: float = DEFAULT_TIMEOUT

    @field_validator("debug", mode="before")
    @classmethod
    def _debug_flag(cls, value: object) -> object:
        # Presence of DEBUG turns it on, unless explicitly falsy
        if isinstance(value, str):
            return value.strip().lower() not in _FALSE_VALUES
        return value

    def require_token(self) -> str:
        """Return the API token, or raise if it is not configured."""
        if not self.openai_token:
            raise ConfigurationError(f"Env var {TOKEN_ENV_VAR} not set")
        return self.openai_token


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e
