"""Shared utilities for telegram-escape.

Modules:
- logger: get_logger for namespaced logging
"""

from telegram_escape.utils.logger import get_logger

__all__ = [
    "get_logger",
]
