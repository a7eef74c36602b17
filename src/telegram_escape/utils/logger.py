"""Minimal logging utilities for telegram-escape.

Provides a simple get_logger function that wraps the standard library logging.
The library never installs handlers; applications configure logging.

Example:
    >>> from telegram_escape.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Escaping message")
"""

from __future__ import annotations

import logging

_ROOT = "telegram_escape"


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger under the "telegram_escape." namespace.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'telegram_escape.mymodule'
    """
    if not (name == _ROOT or name.startswith(f"{_ROOT}.")):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)
