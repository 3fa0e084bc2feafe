"""Access-control settings (conventional Pydantic v2)."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ---- Defaults ---------------------------------------------------------------

DEFAULT_APP_NAME = "Research Portal Access Control"
DEFAULT_LOGGING_LEVEL = "INFO"

_LEVEL_NAMES = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}


# ---- Helpers ----------------------------------------------------------------

def _resolve_path(value: Path | str | None) -> Path | None:
    """Expand and absolutize a configurable path; blanks mean unset."""

    if value in (None, ""):
        return None
    candidate = value if isinstance(value, Path) else Path(str(value).strip())
    return candidate.expanduser().resolve()


# ---- Settings ---------------------------------------------------------------

class Settings(BaseSettings):
    """Engine settings loaded from PORTAL_ACCESS_* environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PORTAL_ACCESS_",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
    )

    # Core
    app_name: str = DEFAULT_APP_NAME
    logging_level: str = DEFAULT_LOGGING_LEVEL

    # Mapping tables
    config_file: Path | None = Field(
        default=None,
        description=(
            "Optional JSON document overriding the built-in role-permission, "
            "role-status and workspace-role tables."
        ),
    )

    @field_validator("logging_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> str:
        if value is None:
            return DEFAULT_LOGGING_LEVEL
        level = str(value).strip().upper()
        if level not in _LEVEL_NAMES:
            raise ValueError(
                "logging_level must be one of " + ", ".join(sorted(_LEVEL_NAMES))
            )
        return level

    @field_validator("config_file", mode="before")
    @classmethod
    def _validate_config_file(cls, value: Any) -> Path | None:
        path = _resolve_path(value)
        if path is not None and not path.is_file():
            raise ValueError(f"config_file {path} does not exist")
        return path

    # ---- Convenience ----

    @property
    def logging_level_value(self) -> int:
        return logging.getLevelName(self.logging_level)


@lru_cache(maxsize=1)
def _build_settings() -> Settings:
    return Settings()


def get_settings() -> Settings:
    return _build_settings()


def reload_settings() -> Settings:
    _build_settings.cache_clear()
    return _build_settings()


__all__ = [
    "DEFAULT_APP_NAME",
    "DEFAULT_LOGGING_LEVEL",
    "Settings",
    "get_settings",
    "reload_settings",
]
