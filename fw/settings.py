"""Process configuration loaded from FW_* environment variables.

The catalog itself lives in a JSON file (see ``fw.store``).  This module only
covers how the process finds that file and the user's home directory.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_NAME = ".fw.json"


class FwSettings(BaseSettings):
    """fw settings.

    All fields are read from environment variables with the ``FW_`` prefix.
    For example, ``FW_LOG_LEVEL=DEBUG`` maps to ``log_level``.
    """

    model_config = SettingsConfigDict(
        env_prefix="FW_",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "WARNING"

    # -- Locations -------------------------------------------------------------
    config: str | None = None
    """Explicit catalog path.  Falls back to ``<home>/.fw.json``."""

    home: Path | None = None
    """Home directory override.  Defaults to the current user's home."""

    @field_validator("config", "home", mode="before")
    @classmethod
    def empty_as_unset(cls, value: object) -> object:
        """``FW_HOME=`` / ``FW_CONFIG=`` mean "not set", not the current directory."""
        if isinstance(value, str) and not value.strip():
            return None
        return value


@dataclass(frozen=True)
class Environment:
    """Resolved, read-only process environment.

    Passed explicitly into path expansion and persistence so the resolver and
    sanity checker stay pure functions of their inputs.
    """

    home: Path | None = None
    config_override: str | None = None

    @classmethod
    def from_settings(cls, settings: FwSettings) -> Environment:
        return cls(home=settings.home or _user_home(), config_override=settings.config)


def _user_home() -> Path | None:
    """Return the current user's home directory, or None if undeterminable."""
    try:
        return Path.home()
    except RuntimeError:
        return None


@lru_cache(maxsize=1)
def get_settings() -> FwSettings:
    """Return a cached settings instance.

    Call ``get_settings.cache_clear()`` in tests to force a re-read after
    overriding env vars.
    """
    return FwSettings()


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    """Return the cached process environment derived from ``get_settings()``."""
    return Environment.from_settings(get_settings())
