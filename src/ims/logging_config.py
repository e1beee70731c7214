"""Logging setup for IMS.

Every module logs through ``get_logger`` so all records share the ``ims``
namespace and one handler configured by ``configure_logging``.
"""

from __future__ import annotations

import logging
import sys

__all__ = ["get_logger", "configure_logging", "reset_logging"]

_LOGGER_PREFIX = "ims"
_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

_handler: logging.Handler | None = None


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ims namespace."""
    if name == _LOGGER_PREFIX or name.startswith(f"{_LOGGER_PREFIX}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a single stderr handler to the ims root logger.

    Safe to call more than once; later calls only change the level.
    """
    global _handler

    root = logging.getLogger(_LOGGER_PREFIX)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    root.setLevel(level)

    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(_handler)
        root.propagate = False
    return root


def reset_logging() -> None:
    """Remove the handler installed by configure_logging (used in tests)."""
    global _handler

    root = logging.getLogger(_LOGGER_PREFIX)
    if _handler is not None:
        root.removeHandler(_handler)
        _handler = None
    root.propagate = True
    root.setLevel(logging.NOTSET)
