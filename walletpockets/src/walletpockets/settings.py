"""
Configuration for walletpockets.

Settings come from environment variables prefixed with ``POCKETS_``; nested
fields use ``__`` (e.g. ``POCKETS_LOGGING__LEVEL=DEBUG``).
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from walletpockets.registry import DEFAULT_POCKETS

DEFAULT_DATA_DIR = Path.home() / ".walletpockets"


class LoggingSettings(BaseModel):
    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.upper()


class StoreSettings(BaseModel):
    filename: str = "pockets.json"
    # Pockets seeded into a fresh store
    default_pockets: list[str] = Field(default_factory=lambda: list(DEFAULT_POCKETS))


class PocketSettings(BaseSettings):
    """Top-level settings."""

    model_config = SettingsConfigDict(
        env_prefix="POCKETS_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    data_dir: Path = DEFAULT_DATA_DIR
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    store: StoreSettings = Field(default_factory=StoreSettings)

    @property
    def store_path(self) -> Path:
        return self.data_dir / self.store.filename


_settings: PocketSettings | None = None


def get_settings() -> PocketSettings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = PocketSettings()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next get_settings() reloads them."""
    global _settings
    _settings = None
