"""Root logger setup shared by the client runtime and the reference service.

``HAAS_LOG_LEVEL`` names a level (``DEBUG``, ``warning``, ``10``); a truthy
``HAAS_DEBUG`` forces DEBUG. Either one overrides the settings toggle.
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"
LEVEL_ENV = "HAAS_LOG_LEVEL"
DEBUG_ENV = "HAAS_DEBUG"

_TRUTHY = {"1", "true", "yes", "on"}


def _parse_level(raw: Union[int, str, None]) -> Optional[int]:
    if isinstance(raw, int):
        return raw
    text = str(raw or "").strip()
    if not text:
        return None
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else None


def level_from_env() -> Optional[int]:
    """Level forced through the environment, or ``None`` when nothing is set."""
    level = _parse_level(os.getenv(LEVEL_ENV))
    if level is not None:
        return level
    if os.getenv(DEBUG_ENV, "").strip().lower() in _TRUTHY:
        return logging.DEBUG
    return None


def configure_root(default_level: Union[int, str] = logging.INFO) -> int:
    """Install the compact console format once and set the root level.

    Returns the level now in effect.
    """
    level = level_from_env()
    if level is None:
        level = _parse_level(default_level) or logging.INFO

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT, datefmt=DATE_FORMAT)
    root.setLevel(level)
    # urllib3 logs each connection attempt at DEBUG
    logging.getLogger("urllib3").setLevel(max(level, logging.INFO))
    return level


def apply_debug_preference(debug_enabled: bool) -> int:
    """Follow the settings toggle unless the environment pins a level."""
    level = level_from_env()
    if level is None:
        level = logging.DEBUG if debug_enabled else logging.INFO
    logging.getLogger().setLevel(level)
    return level


def env_requests_debug() -> bool:
    """True when the environment asks for DEBUG output."""
    level = level_from_env()
    return level is not None and level <= logging.DEBUG


__all__ = [
    "apply_debug_preference",
    "configure_root",
    "env_requests_debug",
    "level_from_env",
]
