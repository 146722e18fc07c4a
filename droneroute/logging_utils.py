"""Mini README: Application-wide logging helpers for droneroute.

Structure:
    * configure_root_logger - attach the shared handler and set the level.
    * get_logger - module logger factory used across the package.

Usage:
    Every module creates ``LOGGER = get_logger(__name__)`` at import time.
    The root handler is attached exactly once per process; later calls to
    ``configure_root_logger`` only adjust the level, which lets the CLI
    raise verbosity after modules have already been imported.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False
_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"


def _coerce_level(level: Union[int, str]) -> int:
    """Translate level names such as ``"debug"`` into logging constants."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def configure_root_logger(level: Union[int, str] = logging.INFO) -> None:
    """Attach the droneroute formatter to the root logger and set its level."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    root_logger.setLevel(_coerce_level(level))
    if _LOGGER_INITIALISED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger under the ``droneroute`` hierarchy."""

    if not _LOGGER_INITIALISED:
        configure_root_logger()
    return logging.getLogger(name)
