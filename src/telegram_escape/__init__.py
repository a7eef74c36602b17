"""telegram-escape: make Markdown safe for Telegram's MarkdownV2 parse mode.

MarkdownV2 rejects any message where a reserved character such as ``_``,
``.`` or ``!`` appears unescaped outside a formatting construct. This package
escapes exactly those characters while keeping real formatting (emphasis,
links, code) intact.

Quick Start:
    >>> from telegram_escape import tg_escape
    >>> tg_escape("Use the /get_stat command :)")
    'Use the /get\\\\_stat command :\\\\)'

    >>> tg_escape("`a_b` stays code, *this* stays emphasis.")
    '`a_b` stays code, _this_ stays emphasis\\\\.'

Pipeline:
    parse_events  ->  escape_events  ->  serialize_events
    (markdown-it)     (context-aware)    (MarkdownV2 syntax)

Known limitation:
    tg_escape is not idempotent. Running it on its own output can double
    backslashes inside code, since code contents are never unescaped.
"""

from telegram_escape.config import (
    EscapeConfig,
    escape_config_context,
    get_escape_config,
    reset_escape_config,
    set_escape_config,
)
from telegram_escape.errors import ConfigError, SerializeError, TelegramEscapeError
from telegram_escape.escaper import escape_events, escape_text
from telegram_escape.events import (
    BlockQuote,
    CodeBlockEnd,
    CodeBlockStart,
    CodeSpan,
    Emphasis,
    End,
    Event,
    HardBreak,
    Heading,
    Image,
    Item,
    Link,
    List,
    Paragraph,
    Rule,
    SoftBreak,
    Start,
    Strikethrough,
    Strong,
    Tag,
    TextRun,
)
from telegram_escape.parser import parse_events
from telegram_escape.serializer import MarkdownV2Serializer, serialize_events
from telegram_escape.utils.logger import get_logger

__version__ = "0.1.0"

logger = get_logger(__name__)


def tg_escape(text: str) -> str:
    """Escape text for Telegram MarkdownV2.

    Args:
        text: Markdown-like input

    Returns:
        Text ready to send with ``parse_mode="MarkdownV2"``

    Example:
        >>> tg_escape("2 + 2 = 4")
        '2 \\\\+ 2 \\\\= 4'
    """
    config = get_escape_config()
    result = serialize_events(escape_events(parse_events(text)), config)
    logger.debug("Escaped %d chars into %d chars", len(text), len(result))
    return result


__all__ = [  # noqa: RUF022 - grouped by category
    # Version
    "__version__",
    # Core API
    "tg_escape",
    "parse_events",
    "escape_events",
    "escape_text",
    "serialize_events",
    "MarkdownV2Serializer",
    # Text-bearing events
    "Event",
    "TextRun",
    "CodeSpan",
    # Structural events
    "CodeBlockStart",
    "CodeBlockEnd",
    "Start",
    "End",
    "SoftBreak",
    "HardBreak",
    "Rule",
    # Tags
    "Tag",
    "Paragraph",
    "Heading",
    "BlockQuote",
    "List",
    "Item",
    "Emphasis",
    "Strong",
    "Strikethrough",
    "Link",
    "Image",
    # Configuration (ContextVar-based)
    "EscapeConfig",
    "get_escape_config",
    "set_escape_config",
    "reset_escape_config",
    "escape_config_context",
    # Errors
    "TelegramEscapeError",
    "ConfigError",
    "SerializeError",
]
