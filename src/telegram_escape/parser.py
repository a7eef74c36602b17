"""Structural parser: Markdown text to a lazy event stream.

The grammar is CommonMark, provided by markdown-it-py, plus GFM strikethrough
(`~x~` and `~~x~~`, see ``telegram_escape.strikethrough``). These two
modules are the only places that know about markdown-it tokens; everything
downstream works on ``telegram_escape.events``.

Raw HTML recognition is off: MarkdownV2 has no HTML, so ``<b>`` is literal
text and gets escaped like any other text.

Malformed Markdown never raises. It degrades to text runs following the
grammar's own recovery rules.

Example:
    >>> list(parse_events("*hi*"))  # doctest: +NORMALIZE_WHITESPACE
    [Start(tag=Paragraph()), Start(tag=Emphasis()), TextRun(content='hi'),
     End(tag=Emphasis()), End(tag=Paragraph())]

Thread Safety:
    The MarkdownIt instance is configured once and only read afterwards;
    each parse() call builds its own state.

"""

from collections.abc import Iterator, Sequence
from functools import cache

from markdown_it import MarkdownIt
from markdown_it.token import Token

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
    TextRun,
)
from telegram_escape.strikethrough import strikethrough_plugin
from telegram_escape.utils.logger import get_logger

logger = get_logger(__name__)

# Container tokens whose open/close pair maps to a value-only tag
_SIMPLE_TAGS = {
    "blockquote": BlockQuote,
    "list_item": Item,
    "em": Emphasis,
    "strong": Strong,
    "s": Strikethrough,
}


@cache
def _markdown() -> MarkdownIt:
    """Shared markdown-it instance: CommonMark + GFM strikethrough, no raw HTML."""
    return MarkdownIt("commonmark", {"html": False}).use(strikethrough_plugin)


def parse_events(text: str) -> Iterator[Event]:
    """Parse Markdown text into a lazy stream of events.

    Args:
        text: Raw Markdown-like input

    Yields:
        Events in document order
    """
    if not text:
        return
    yield from _map_tokens(_markdown().parse(text))


def _map_tokens(tokens: Sequence[Token]) -> Iterator[Event]:
    """Map markdown-it tokens (block or inline level) to events."""
    # Closing tokens carry no attributes, so open tags are remembered here.
    open_tags: list[List | Link] = []

    for token in tokens:
        kind = token.type
        name, _, side = kind.rpartition("_")

        if side in ("open", "close") and name in _SIMPLE_TAGS:
            tag = _SIMPLE_TAGS[name]()
            yield Start(tag) if side == "open" else End(tag)
            continue

        match kind:
            case "inline":
                yield from _map_tokens(token.children or ())
            case "text" | "text_special":
                if token.content:
                    yield TextRun(token.content)
            case "code_inline":
                yield CodeSpan(token.content)
            case "softbreak":
                yield SoftBreak()
            case "hardbreak":
                yield HardBreak()
            case "paragraph_open":
                # Tight list items hide their paragraphs
                if not token.hidden:
                    yield Start(Paragraph())
            case "paragraph_close":
                if not token.hidden:
                    yield End(Paragraph())
            case "heading_open":
                yield Start(Heading(int(token.tag[1:])))
            case "heading_close":
                yield End(Heading(int(token.tag[1:])))
            case "bullet_list_open":
                tag = List(ordered=False, marker=token.markup)
                open_tags.append(tag)
                yield Start(tag)
            case "ordered_list_open":
                start = token.attrGet("start")
                tag = List(
                    ordered=True,
                    start=int(start) if start is not None else 1,
                    marker=token.markup,
                )
                open_tags.append(tag)
                yield Start(tag)
            case "bullet_list_close" | "ordered_list_close" | "link_close":
                yield End(open_tags.pop())
            case "link_open":
                tag = Link(url=str(token.attrGet("href") or ""), title=_title(token))
                open_tags.append(tag)
                yield Start(tag)
            case "image":
                tag = Image(url=str(token.attrGet("src") or ""), title=_title(token))
                yield Start(tag)
                yield from _map_tokens(token.children or ())
                yield End(tag)
            case "fence":
                yield from _code_block(token.content, token.info.strip(), fenced=True)
            case "code_block":
                yield from _code_block(token.content, "", fenced=False)
            case "hr":
                yield Rule()
            case _:
                logger.debug("Unmapped markdown-it token %r degraded to text", kind)
                if token.content:
                    yield TextRun(token.content)


def _code_block(content: str, info: str, *, fenced: bool) -> Iterator[Event]:
    yield CodeBlockStart(info=info, fenced=fenced)
    if content:
        yield TextRun(content)
    yield CodeBlockEnd()


def _title(token: Token) -> str | None:
    title = token.attrGet("title")
    return str(title) if title else None
