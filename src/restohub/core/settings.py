"""
Centralized settings for restohub.

One validated, cached settings object decides where records are stored,
which spaces exist and how the service logs. Every value can be set via
``RESTOHUB_*`` environment variables or a ``.env`` file.

Examples:
    >>> from restohub.core.settings import HubSettings
    >>> settings = HubSettings(storage_backend="memory", spaces=["gaiax"])
    >>> settings.storage_backend
    <StorageBackend.MEMORY: 'memory'>

Tags:
    settings, configuration, pydantic, environment, restohub
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageBackend(str, Enum):
    """Where collections are persisted."""

    FILE = "file"
    MEMORY = "memory"


class HubSettings(BaseSettings):
    """restohub configuration.

    Fields
    ──────
    data_dir              : Directory holding one JSON file per collection
    storage_backend       : ``file`` (atomic JSON files) or ``memory``
    log_level             : structlog level
    log_format            : ``json``, ``console`` or ``auto`` (JSON when not a tty)
    spaces                : Spaces that accept publish/consume requests
    default_currency      : Currency for menu items whose payload omits one
    default_retention_days: Retention in the default product policy
    """

    model_config = SettingsConfigDict(
        env_prefix="RESTOHUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Storage ──────────────────────────────────────────────────
    data_dir: Path = Field(
        default_factory=lambda: Path.home() / ".restohub" / "data",
        description="Directory for persisted collections",
    )
    storage_backend: StorageBackend = Field(default=StorageBackend.FILE)

    # ── Observability ────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="auto")

    # ── Domain ───────────────────────────────────────────────────
    spaces: list[str] = Field(default_factory=lambda: ["segittur", "gaiax"])
    default_currency: str = Field(default="EUR", min_length=1)
    default_retention_days: int = Field(default=30, ge=0)

    @field_validator("spaces")
    @classmethod
    def _normalize_spaces(cls, value: list[str]) -> list[str]:
        names = [s.strip().lower() for s in value if s and s.strip()]
        if not names:
            raise ValueError("at least one space must be configured")
        return list(dict.fromkeys(names))

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        value = value.lower()
        if value not in ("json", "console", "auto"):
            raise ValueError("log_format must be 'json', 'console' or 'auto'")
        return value

    @property
    def json_logs(self) -> bool | None:
        """``None`` lets :func:`configure_logging` pick by tty."""
        if self.log_format == "auto":
            return None
        return self.log_format == "json"


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, HubSettings] = {}


def get_settings(*, _force_reload: bool = False) -> HubSettings:
    """Load, validate, and cache a :class:`HubSettings` instance."""
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]
    settings = HubSettings()
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Drop the cached settings (for testing)."""
    _settings_cache.clear()
