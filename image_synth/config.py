"""Configuration settings for image_synth.

Uses pydantic-settings for config parsing from environment variables
and defaults. Configuration precedence: CLI flags > env vars > defaults.
"""

import json
from typing import Literal

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MODEL = "gemini-2.5-flash-image-preview"


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables with the IMAGE_SYNTH_
    prefix. The API key is also accepted as GEMINI_API_KEY or API_KEY.
    """

    model_config = SettingsConfigDict(
        env_prefix="IMAGE_SYNTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Remote service
    api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "IMAGE_SYNTH_API_KEY", "GEMINI_API_KEY", "API_KEY"
        ),
        description="API key for the generation endpoint",
    )
    model: str = Field(
        default=DEFAULT_MODEL,
        min_length=1,
        description="Model used for image synthesis",
    )

    # Operational
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    # Web server
    host: str = Field(default="127.0.0.1", description="Bind address for serve")
    port: int = Field(default=8000, ge=1, le=65535, description="Port for serve")

    def masked_api_key(self) -> str | None:
        """Return the API key with all but the last four characters hidden."""
        if self.api_key is None:
            return None
        raw = self.api_key.get_secret_value()
        if len(raw) <= 4:
            return "****"
        return "*" * (len(raw) - 4) + raw[-4:]

    def public_dict(self) -> dict[str, object]:
        """Effective settings safe to display."""
        return {
            "api_key": self.masked_api_key(),
            "model": self.model,
            "log_level": self.log_level,
            "host": self.host,
            "port": self.port,
        }


def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()


def print_settings_json(settings: Settings | None = None) -> str:
    """Render effective settings as JSON.

    Args:
        settings: Optional settings instance; uses default if not provided.

    Returns:
        JSON string of effective settings, with the API key masked.
    """
    if settings is None:
        settings = get_settings()
    return json.dumps(settings.public_dict(), indent=2)


__all__ = ["DEFAULT_MODEL", "Settings", "get_settings", "print_settings_json"]
