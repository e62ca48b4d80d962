"""Application configuration."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PersistenceSettings(BaseModel):
    """Snapshot persistence configuration."""

    # Storage medium for the two snapshot slots
    # memory: process-local, nothing survives a restart
    # file: one JSON file per slot under `directory`
    # database: `snapshots` table reached through `database_url`
    backend: Literal["memory", "file", "database"] = "file"

    directory: Path = Path(".canopy")
    database_url: str = "sqlite+aiosqlite:///canopy.db"

    # Quiet window before a burst of changes is written out
    debounce_ms: int = Field(default=300, ge=0)

    # Storage slots owned exclusively by Canopy
    comments_key: str = "canopy:comments"
    votes_key: str = "canopy:userVotes"

    @model_validator(mode="after")
    def validate_distinct_keys(self) -> "PersistenceSettings":
        """Comments and votes must live in different slots."""
        if self.comments_key == self.votes_key:
            raise ValueError("comments_key and votes_key must differ")
        return self


class ObservabilitySettings(BaseModel):
    """Where logfire telemetry goes."""

    # Ships telemetry to Logfire cloud when set (OBSERVABILITY__LOGFIRE_TOKEN)
    logfire_token: str | None = None

    # Explicit override; None means "send if there is a token"
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Set environment variables to override, nested values use ``__``:

        ENVIRONMENT=production
        PERSISTENCE__BACKEND=database
        PERSISTENCE__DATABASE_URL=sqlite+aiosqlite:////var/lib/canopy/canopy.db
        PERSISTENCE__DEBOUNCE_MS=500
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows PERSISTENCE__BACKEND syntax
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    persistence: PersistenceSettings = PersistenceSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
