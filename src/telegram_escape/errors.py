"""Exception classes for telegram-escape.

Parsing and escaping never fail; these cover invalid configuration and
broken event-stream invariants during serialization.
"""

from __future__ import annotations


class TelegramEscapeError(Exception):
    """Base exception for all telegram-escape errors.
    
    Subclass this for specific error categories.
    """

    pass


class ConfigError(TelegramEscapeError):
    """Invalid EscapeConfig value.
    
    Raised when a config field cannot produce valid MarkdownV2
    (e.g. a code fence shorter than three backticks).
    """

    def __init__(self, field: str, message: str) -> None:
        """Initialize config error.
        
        Args:
            field: Name of the offending EscapeConfig field
            message: Description of the problem
        """
        self.field = field
        super().__init__(f"Invalid config '{field}': {message}")


class SerializeError(TelegramEscapeError):
    """Error during MarkdownV2 serialization.
    
    Raised when the event stream is structurally broken: an End event
    without a matching Start, or containers left open at the end.
    Parser-produced streams never trigger it.
    """

    def __init__(self, message: str, index: int | None = None) -> None:
        """Initialize serialize error.
        
        Args:
            message: Error description
            index: Position of the offending event in the stream (optional)
        """
        self.index = index
        location = f"event {index}: " if index is not None else ""
        super().__init__(f"{location}{message}")
