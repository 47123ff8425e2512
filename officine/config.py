"""Application configuration via pydantic-settings.

Settings are organized into logical groups and composed into a single Settings object.
Every value can be overridden from the environment or a .env file.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettings(BaseSettings):
    """In-memory store bootstrap settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    seed_username: str = Field(default="admin", description="Username of the bootstrap administrator")
    seed_password: str = Field(default="admin123", description="Password of the bootstrap administrator")
    seed_full_name: str = Field(default="Administrateur", description="Display name of the bootstrap administrator")


class LifecycleSettings(BaseSettings):
    """Inspection status lifecycle settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    enforce_transitions: bool = Field(
        default=False,
        description="Reject status changes not listed in the transition table",
    )


class ExportSettings(BaseSettings):
    """CSV / JSON report export settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    json_indent: int = Field(default=2, description="Indentation used for JSON exports")
    csv_inspectors_separator: str = Field(default=", ", description="Separator between inspector names")


class ServerSettings(BaseSettings):
    """HTTP transport settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000)
    session_header: str = Field(default="X-Session-Token", description="Header carrying the session token")


class Settings(BaseSettings):
    """Root settings composing all sub-settings.

    Usage:
        settings = Settings()
        settings.store.seed_username
        settings.lifecycle.enforce_transitions
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Composed settings (loaded from same .env)
    store: StoreSettings = Field(default_factory=StoreSettings)
    lifecycle: LifecycleSettings = Field(default_factory=LifecycleSettings)
    export: ExportSettings = Field(default_factory=ExportSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid:
            msg = f"Invalid log level: {v}. Must be one of {valid}"
            raise ValueError(msg)
        return upper

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


# Module-level singleton, import this wherever settings are needed.
settings = Settings()
