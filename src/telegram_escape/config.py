"""ContextVar-based serializer configuration for telegram-escape.

Provides thread-local configuration using Python's ContextVars (PEP 567).
``tg_escape`` reads the active config once per call.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Default MarkdownV2 output
    text = tg_escape("**bold** _italic_")

    # Temporarily switch markers
    with escape_config_context(EscapeConfig(emphasis_token="*", strong_token="**")):
        text = tg_escape("**bold** _italic_")

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

from telegram_escape.errors import ConfigError

# CommonMark requires at least three fence characters.
MIN_CODE_BLOCK_TOKEN_COUNT = 3


@dataclass(frozen=True, slots=True)
class EscapeConfig:
    """Immutable serializer configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        code_block_token_count: Number of backticks fencing code blocks
        emphasis_token: Marker wrapping emphasized text
        strong_token: Marker wrapping strong text and headings
        strikethrough_token: Marker wrapping struck-through text

    """

    code_block_token_count: int = 3
    emphasis_token: str = "_"
    strong_token: str = "*"
    strikethrough_token: str = "~"

    def __post_init__(self) -> None:
        if self.code_block_token_count < MIN_CODE_BLOCK_TOKEN_COUNT:
            raise ConfigError(
                "code_block_token_count",
                f"must be at least {MIN_CODE_BLOCK_TOKEN_COUNT}, got {self.code_block_token_count}",
            )
        for name in ("emphasis_token", "strong_token", "strikethrough_token"):
            if not getattr(self, name):
                raise ConfigError(name, "must not be empty")

    @property
    def code_fence(self) -> str:
        """Fence line prefix for code blocks (e.g. ```)."""
        return "`" * self.code_block_token_count

    @classmethod
    def from_dict(cls, config_dict: dict) -> "EscapeConfig":
        """Create EscapeConfig from dictionary.

        Only includes keys that are valid EscapeConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                EscapeConfig attribute names.

        Returns:
            New EscapeConfig instance with values from dict.

        Raises:
            ConfigError: If a value is invalid.

        Example:
            >>> config = EscapeConfig.from_dict({
            ...     "code_block_token_count": 4,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.code_block_token_count
            4

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: EscapeConfig = EscapeConfig()

_escape_config: ContextVar[EscapeConfig] = ContextVar(
    "escape_config",
    default=_DEFAULT_CONFIG,
)


def get_escape_config() -> EscapeConfig:
    """Get current escape configuration (thread-local)."""
    return _escape_config.get()


def set_escape_config(config: EscapeConfig) -> None:
    """Set escape configuration for current context.

    Args:
        config: EscapeConfig instance to use for this context.

    """
    _escape_config.set(config)


def reset_escape_config() -> None:
    """Reset to the default configuration singleton."""
    _escape_config.set(_DEFAULT_CONFIG)


@contextmanager
def escape_config_context(config: EscapeConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: EscapeConfig to use within the context.

    Yields:
        None

    Example:
        >>> with escape_config_context(EscapeConfig(code_block_token_count=4)):
        ...     tg_escape("```\\ncode\\n```")
        '````\\ncode\\n````'

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _escape_config.get()
    _escape_config.set(config)
    try:
        yield
    finally:
        _escape_config.set(previous)


__all__ = [
    "EscapeConfig",
    "get_escape_config",
    "set_escape_config",
    "reset_escape_config",
    "escape_config_context",
]
