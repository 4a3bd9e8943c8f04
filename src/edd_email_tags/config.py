"""Settings — process-wide configuration for edd-email-tags.

Settings are read from the environment once and cached. The debug flag
mirrors the host's ``WP_DEBUG`` switch: when it is on, resolver failures
are written to the log instead of being dropped silently.

Environment variables
---------------------
EDD_EMAIL_TAGS_DEBUG
    Enables resolver-failure logging. Falls back to ``WP_DEBUG``.
EDD_EMAIL_TAGS_LOG_LEVEL
    Level name used by the CLI when configuring logging.
"""
from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Optional

from pydantic import BaseModel, Field, field_validator

_TRUTHY = frozenset({"1", "true", "yes", "on"})

#: Level names accepted by `Settings.log_level` and the CLI `--log-level` option.
LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

logger = logging.getLogger(__name__)


def _is_truthy(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in _TRUTHY


class Settings(BaseModel):
    """Runtime settings.

    Parameters
    ----------
    debug:
        Log resolver failures (tag id and error message) at ERROR level.
    log_level:
        Name of the logging level applied by the CLI.
    """

    debug: bool = False
    log_level: str = Field(default="WARNING")

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {value!r}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        An unrecognized log level falls back to WARNING instead of raising.
        """
        env = os.environ if environ is None else environ
        debug_value = env.get("EDD_EMAIL_TAGS_DEBUG")
        if debug_value is None:
            debug_value = env.get("WP_DEBUG")
        log_level = env.get("EDD_EMAIL_TAGS_LOG_LEVEL", "WARNING")
        if log_level.strip().upper() not in LOG_LEVELS:
            logger.warning("Ignoring unknown EDD_EMAIL_TAGS_LOG_LEVEL %r", log_level)
            log_level = "WARNING"
        return cls(debug=_is_truthy(debug_value), log_level=log_level)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the cached process settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def configure(settings: Optional[Settings] = None) -> Settings:
    """Replace the process settings.

    Passing None reloads them from the environment. Returns the settings
    now in effect.
    """
    global _settings
    _settings = settings if settings is not None else Settings.from_env()
    return _settings
