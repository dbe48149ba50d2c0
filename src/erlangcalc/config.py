# src/erlangcalc/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from .errors import ConfigError

DEFAULT_SEARCH_HEADROOM: int = 10_000
DEFAULT_LOG_LEVEL: str = "WARNING"

_ENV_PREFIX = "ERLANGCALC_"


@dataclass(frozen=True)
class Settings:
    # Staffing searches stop at ceil(intensity) + search_headroom agents
    search_headroom: int = DEFAULT_SEARCH_HEADROOM
    log_level: str = DEFAULT_LOG_LEVEL


def _env(name: str) -> Optional[str]:
    """Return a stripped env value, or None when unset/blank."""
    value = os.getenv(_ENV_PREFIX + name, "").strip()
    return value or None


def _int_from_env(name: str, default: int) -> int:
    raw = _env(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{_ENV_PREFIX}{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"{_ENV_PREFIX}{name} must be > 0, got {value}")
    return value


def _level_from_env(name: str, default: str) -> str:
    raw = _env(name)
    if raw is None:
        return default
    level = raw.upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"{_ENV_PREFIX}{name} is not a logging level: {raw!r}")
    return level


def load_settings() -> Settings:
    """
    Reads settings from the environment:
      ERLANGCALC_SEARCH_HEADROOM  (int > 0, default 10000)
      ERLANGCALC_LOG_LEVEL        (DEBUG/INFO/WARNING/..., default WARNING)
    """
    return Settings(
        search_headroom=_int_from_env("SEARCH_HEADROOM", DEFAULT_SEARCH_HEADROOM),
        log_level=_level_from_env("LOG_LEVEL", DEFAULT_LOG_LEVEL),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, read once. Call get_settings.cache_clear() to reload."""
    return load_settings()


def configure_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """Apply the configured level to the package logger and return it."""
    s = settings or get_settings()
    log = logging.getLogger("erlangcalc")
    log.setLevel(s.log_level)
    return log


__all__ = [
    "DEFAULT_SEARCH_HEADROOM",
    "DEFAULT_LOG_LEVEL",
    "Settings",
    "load_settings",
    "get_settings",
    "configure_logging",
]
