"""Runtime settings for densemat.

Settings are read once from ``DENSEMAT_*`` environment variables and
cached. Call reset_settings() after changing the environment.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from functools import lru_cache

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Loggers that already carry a densemat handler
_LOGGER_INITIALIZED: dict[str, bool] = {}

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


@dataclass(frozen=True)
class Settings:
    """Library-wide defaults.

    Attributes:
        rel_tol: Relative tolerance used by Matrix.allclose.
        abs_tol: Absolute tolerance used by Matrix.allclose.
        stable_softmax: Subtract the per-line max before exponentiating.
        log_level: Level name used by configure_logging.
    """

    rel_tol: float = 1e-9
    abs_tol: float = 0.0
    stable_softmax: bool = False
    log_level: str = "WARNING"


def _read_float(key: str, default: float) -> float:
    raw = os.environ.get(key)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ValueError(f"{key}: expected a float, got {raw!r}") from e
    if value < 0:
        raise ValueError(f"{key}: must be non-negative, got {raw!r}")
    return value


def _read_bool(key: str, default: bool) -> bool:
    raw = os.environ.get(key)
    if raw is None:
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"{key}: expected a boolean, got {raw!r}")


def _read_level(key: str, default: str) -> str:
    raw = os.environ.get(key)
    if raw is None:
        return default
    level = raw.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"{key}: unknown log level {raw!r}")
    return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached settings, reading the environment on first call.

    Examples:
        >>> reset_settings()
        >>> isinstance(get_settings().rel_tol, float)
        True

    """
    defaults = Settings()
    return Settings(
        rel_tol=_read_float("DENSEMAT_REL_TOL", defaults.rel_tol),
        abs_tol=_read_float("DENSEMAT_ABS_TOL", defaults.abs_tol),
        stable_softmax=_read_bool("DENSEMAT_STABLE_SOFTMAX", defaults.stable_softmax),
        log_level=_read_level("DENSEMAT_LOG_LEVEL", defaults.log_level),
    )


def reset_settings() -> None:
    """Drop cached settings so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Attach a stderr handler to the ``densemat`` logger.

    Calling it again only updates the level; handlers are not duplicated.

    Args:
        level: Level name or number. Default from settings.

    Returns:
        The configured ``densemat`` logger.

    """
    if level is None:
        level = get_settings().log_level
    logger = logging.getLogger("densemat")
    logger.setLevel(level)
    if not _LOGGER_INITIALIZED.get(logger.name, False):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
        logger.addHandler(handler)
        _LOGGER_INITIALIZED[logger.name] = True
    return logger
