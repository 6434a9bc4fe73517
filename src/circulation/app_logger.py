"""Logging setup for the circulation package.

All modules log under the ``circulation`` logger; output goes through Rich.
"""

import logging
from typing import Optional

from rich.logging import RichHandler

LOG_FORMAT = "%(name)s: %(message)s"
ROOT_LOGGER = "circulation"


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Configure the package logger once and return it."""
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Avoid duplicate handlers when called more than once
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(show_path=False, markup=False)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get the package logger or one of its children."""
    base = logging.getLogger(ROOT_LOGGER)
    if not name or name == ROOT_LOGGER:
        return base
    if name.startswith(ROOT_LOGGER + "."):
        name = name[len(ROOT_LOGGER) + 1:]
    return base.getChild(name)
