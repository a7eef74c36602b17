"""MarkdownV2 serializer: renders an escaped event stream as Telegram text.

Literal payloads are written verbatim, so backslashes inserted by the escaper
survive as-is. The one exception is a single-character payload, which the
escaper leaves alone and this module escapes with the charset of its context.

Dialect mapping:
    Emphasis / Strong / Strikethrough -> _x_ / *x* / ~x~  (EscapeConfig tokens)
    Heading                           -> *x*  (MarkdownV2 has no headings)
    Link / Image                      -> [x](url), ")" and "\\" escaped in url
    CodeSpan                          -> `x`
    Code block                        -> ```lang\\n...\\n```  (fence length from config)
    Block quote                       -> ">" at the start of every line
    List item                         -> escaped source marker ("\\- ", "1\\. ")
    Rule                              -> \\-\\-\\-

Blocks are separated by a blank line, tight list items by a newline.
Output never ends with a newline.

Example:
    >>> from telegram_escape import parse_events, escape_events
    >>> serialize_events(escape_events(parse_events("# Title\\n\\n- a.b")))
    '*Title*\\n\\n\\\\- a\\\\.b'
"""

from collections.abc import Iterable

from telegram_escape.charsets import CODE_RESERVED, LINK_URL_PATTERN, TEXT_PATTERN, TEXT_RESERVED
from telegram_escape.config import EscapeConfig, get_escape_config
from telegram_escape.errors import SerializeError
from telegram_escape.escaper import escape_text
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
from telegram_escape.stringbuilder import StringBuilder
from telegram_escape.utils.logger import get_logger

logger = get_logger(__name__)

_QUOTE_PREFIX = ">"
_RULE = "\\-\\-\\-"
# Telegram ignores \r; it splits "__" so italic is not read as underline.
_ITALIC_SEPARATOR = "\r"


class MarkdownV2Serializer:
    """Render an event stream to Telegram MarkdownV2 text.

    Instances are cheap; each ``serialize`` call starts from fresh state,
    but a single instance must not be shared between threads mid-call.
    """

    __slots__ = (
        "_config",
        "_in_code_block",
        "_last_marker",
        "_line_has_content",
        "_link_depth",
        "_list_counters",
        "_open",
        "_padding",
        "_pending",
        "_sb",
        "_styles",
    )

    def __init__(self, config: EscapeConfig | None = None) -> None:
        self._config = config or get_escape_config()

    def serialize(self, events: Iterable[Event]) -> str:
        """Render events to a string.

        Raises:
            SerializeError: If the stream is unbalanced.
        """
        self._reset()
        for index, event in enumerate(events):
            self._serialize_event(event, index)

        if self._in_code_block:
            raise SerializeError("code block left open at end of stream")
        if self._open:
            raise SerializeError(f"{self._open[-1]!r} left open at end of stream")
        return self._sb.build()

    def _reset(self) -> None:
        self._sb = StringBuilder()
        self._open: list[Tag] = []
        self._padding: list[str] = []
        self._list_counters: list[int] = []
        self._styles: dict[str, int] = {}
        self._pending = 0
        self._line_has_content = False
        self._in_code_block = False
        self._link_depth = 0
        self._last_marker: str | None = None

    def _serialize_event(self, event: Event, index: int) -> None:
        match event:
            case TextRun(content=content):
                reserved = CODE_RESERVED if self._in_code_block else TEXT_RESERVED
                self._write_text(_escape_single(content, reserved))
            case CodeSpan(content=content):
                self._write("`" + _escape_single(content, CODE_RESERVED) + "`")
            case CodeBlockStart(info=info):
                if self._in_code_block:
                    raise SerializeError("code block opened inside a code block", index)
                self._begin_block()
                self._write(self._config.code_fence + _code_language(info))
                self._newline()
                self._in_code_block = True
            case CodeBlockEnd():
                if not self._in_code_block:
                    raise SerializeError("code block closed without being opened", index)
                if self._line_has_content:
                    self._newline()
                self._write(self._config.code_fence)
                self._in_code_block = False
                self._end_block()
            case Start(tag=tag):
                self._open.append(tag)
                self._start(tag)
            case End(tag=tag):
                if not self._open or self._open[-1] != tag:
                    raise SerializeError(f"{tag!r} closed without matching start", index)
                self._open.pop()
                self._end(tag)
            case SoftBreak() | HardBreak():
                self._newline()
            case Rule():
                self._begin_block()
                self._write(_RULE)
                self._end_block()
            case _:
                raise SerializeError(f"unknown event {event!r}", index)

    def _start(self, tag: Tag) -> None:
        match tag:
            case Paragraph():
                self._begin_block()
            case Heading():
                self._begin_block()
                self._open_style(self._config.strong_token)
            case BlockQuote():
                self._begin_block()
                self._write_marker(_QUOTE_PREFIX)
                self._padding.append(_QUOTE_PREFIX)
            case List(start=start):
                self._begin_block()
                self._list_counters.append(start)
            case Item():
                self._begin_block()
                marker = self._next_item_marker()
                self._write_marker(escape_text(marker, TEXT_PATTERN) + " ")
                self._padding.append(" " * (len(marker) + 1))
            case Emphasis():
                self._open_style(self._config.emphasis_token)
            case Strong():
                self._open_style(self._config.strong_token)
            case Strikethrough():
                self._open_style(self._config.strikethrough_token)
            case Link() | Image():
                # An image inside a link keeps only its alt text
                if self._link_depth == 0:
                    self._write("[")
                self._link_depth += 1

    def _end(self, tag: Tag) -> None:
        match tag:
            case Paragraph():
                self._end_block(paragraph=True)
            case Heading():
                self._close_style(self._config.strong_token)
                self._end_block()
            case BlockQuote():
                self._padding.pop()
                self._end_block()
            case List():
                self._list_counters.pop()
                self._end_block()
            case Item():
                self._padding.pop()
                self._pending = max(self._pending, 1)
            case Emphasis():
                self._close_style(self._config.emphasis_token)
            case Strong():
                self._close_style(self._config.strong_token)
            case Strikethrough():
                self._close_style(self._config.strikethrough_token)
            case Link(url=url) | Image(url=url):
                self._link_depth -= 1
                if self._link_depth == 0:
                    self._write("](" + escape_text(url, LINK_URL_PATTERN) + ")")

    def _next_item_marker(self) -> str:
        lst = self._open[-2] if len(self._open) > 1 else None
        if not isinstance(lst, List):
            return "-"
        if not lst.ordered:
            return lst.marker
        number = self._list_counters[-1]
        self._list_counters[-1] = number + 1
        return f"{number}{lst.marker}"

    # -------------------------------------------------------------------------
    # Inline styles
    # -------------------------------------------------------------------------

    def _open_style(self, token: str) -> None:
        depth = self._styles.get(token, 0)
        if depth == 0:
            self._write_style(token)
        self._styles[token] = depth + 1

    def _close_style(self, token: str) -> None:
        depth = self._styles[token] - 1
        self._styles[token] = depth
        if depth == 0:
            self._write_style(token)

    def _write_style(self, token: str) -> None:
        adjacent = not self._pending and self._last_marker is not None
        if adjacent and token.startswith("_") and self._last_marker.endswith("_"):
            self._sb.append(_ITALIC_SEPARATOR)
        self._write(token)
        self._last_marker = token

    # -------------------------------------------------------------------------
    # Layout
    # -------------------------------------------------------------------------

    def _begin_block(self) -> None:
        if self._line_has_content:
            self._pending = max(self._pending, 1)

    def _end_block(self, *, paragraph: bool = False) -> None:
        # Tight list items have no paragraphs; keep their blocks one line apart
        if not paragraph and self._open and isinstance(self._open[-1], Item):
            self._pending = max(self._pending, 1)
        else:
            self._pending = 2

    def _flush(self) -> None:
        if not self._pending:
            return
        padding = "".join(self._padding)
        for _ in range(self._pending - 1):
            self._sb.append("\n").append(padding.rstrip())
        self._sb.append("\n").append(padding)
        self._pending = 0
        self._line_has_content = False
        self._last_marker = None

    def _write(self, s: str) -> None:
        self._flush()
        self._sb.append(s)
        self._line_has_content = True
        self._last_marker = None

    def _write_marker(self, s: str) -> None:
        """Write a line prefix that does not count as line content."""
        self._flush()
        self._sb.append(s)

    def _write_text(self, text: str) -> None:
        first, *rest = text.split("\n")
        if first:
            self._write(first)
        for line in rest:
            self._newline()
            if line:
                self._write(line)

    def _newline(self) -> None:
        self._flush()
        self._sb.append("\n").append("".join(self._padding))
        self._line_has_content = False
        self._last_marker = None


def _code_language(info: str) -> str:
    """Language word of a fence info string, or "" if MarkdownV2 cannot carry it."""
    words = info.split()
    if not words:
        return ""
    language = words[0]
    if not CODE_RESERVED.isdisjoint(language):
        logger.debug("Dropped code block language %r", language)
        return ""
    return language


def _escape_single(content: str, reserved: frozenset[str]) -> str:
    """Escape a one-character payload; longer payloads were handled upstream."""
    if len(content) == 1 and content in reserved:
        return "\\" + content
    return content


def serialize_events(events: Iterable[Event], config: EscapeConfig | None = None) -> str:
    """Render an escaped event stream as MarkdownV2.

    Args:
        events: Stream from ``escape_events``
        config: Serializer options (active EscapeConfig if None)

    Returns:
        MarkdownV2 text
    """
    return MarkdownV2Serializer(config).serialize(events)
