"""
utils/logger.py
---------------
Logging setup shared by the mapper and the demo application.

Modules call `get_logger(__name__)`; the first call installs a stdout
handler on the root logger at LOG_LEVEL. `configure()` can be called again
to change the level, e.g. DEBUG to see every statement the mapper runs.
"""

import logging
import sys

from config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_handler: logging.Handler | None = None


def configure(level: str = LOG_LEVEL) -> logging.Handler:
    """
    Install (once) the stdout handler and set the root level.

    Args:
        level: Level name such as "DEBUG" or "INFO". Unknown names mean INFO.

    Returns:
        The handler attached to the root logger.
    """
    global _handler
    root = logging.getLogger()
    if _handler is None:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root.addHandler(_handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return _handler


def get_logger(name: str) -> logging.Logger:
    """Named logger; configures logging on first use."""
    if _handler is None:
        configure()
    return logging.getLogger(name)
