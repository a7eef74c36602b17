"""Typed pipeline events for telegram-escape.

All events are frozen dataclasses with slots for:
- Immutability: the escaper replaces events instead of mutating them
- Memory efficiency: __slots__ reduces memory footprint
- Pattern matching: Python 3.10+ match statements work naturally

Event kinds:
Event
├── TextRun          literal text (also code block contents)
├── CodeSpan         inline code contents
├── CodeBlockStart   code block opens
├── CodeBlockEnd     code block closes
├── Start / End      container open/close, carrying a Tag
│   └── Tag: Paragraph, Heading, BlockQuote, List, Item,
│            Emphasis, Strong, Strikethrough, Link, Image
└── SoftBreak, HardBreak, Rule

Events are produced by ``parse_events``, rewritten by ``escape_events`` and
consumed by ``serialize_events``. They exist only for one pass over one input.

"""

from dataclasses import dataclass

# =============================================================================
# Text-bearing events
# =============================================================================


@dataclass(frozen=True, slots=True)
class TextRun:
    """Literal text.

    Inside a code block this holds the block contents.

    """

    content: str


@dataclass(frozen=True, slots=True)
class CodeSpan:
    """Inline code, without the surrounding backticks.

    Markdown: `code`

    """

    content: str


# =============================================================================
# Code block boundaries
# =============================================================================


@dataclass(frozen=True, slots=True)
class CodeBlockStart:
    """Start of a fenced or indented code block.

    Markdown: ```info

    """

    info: str = ""
    fenced: bool = True


@dataclass(frozen=True, slots=True)
class CodeBlockEnd:
    """End of a code block."""


# =============================================================================
# Container tags
# =============================================================================


@dataclass(frozen=True, slots=True)
class Paragraph:
    """Paragraph (absent inside tight list items)."""


@dataclass(frozen=True, slots=True)
class Heading:
    """ATX or setext heading."""

    level: int


@dataclass(frozen=True, slots=True)
class BlockQuote:
    """Block quote.

    Markdown: > quoted

    """


@dataclass(frozen=True, slots=True)
class List:
    """Bullet or ordered list.

    For bullet lists marker is the bullet character (``-``, ``*``, ``+``);
    for ordered lists it is the delimiter (``.`` or ``)``).

    """

    ordered: bool
    start: int = 1
    marker: str = "-"


@dataclass(frozen=True, slots=True)
class Item:
    """List item."""


@dataclass(frozen=True, slots=True)
class Emphasis:
    """Emphasized text.

    Markdown: *text* or _text_

    """


@dataclass(frozen=True, slots=True)
class Strong:
    """Strong text.

    Markdown: **text** or __text__

    """


@dataclass(frozen=True, slots=True)
class Strikethrough:
    """Struck-through text.

    Markdown: ~~text~~

    """


@dataclass(frozen=True, slots=True)
class Link:
    """Hyperlink, including autolinks.

    Markdown: [text](url "title") or <url>

    """

    url: str
    title: str | None = None


@dataclass(frozen=True, slots=True)
class Image:
    """Image; its alt text arrives as events between Start and End.

    Markdown: ![alt](url "title")

    """

    url: str
    title: str | None = None


type Tag = (
    Paragraph
    | Heading
    | BlockQuote
    | List
    | Item
    | Emphasis
    | Strong
    | Strikethrough
    | Link
    | Image
)


@dataclass(frozen=True, slots=True)
class Start:
    """A container opens."""

    tag: Tag


@dataclass(frozen=True, slots=True)
class End:
    """A container closes; tag equals the matching Start's tag."""

    tag: Tag


# =============================================================================
# Leaf markers
# =============================================================================


@dataclass(frozen=True, slots=True)
class SoftBreak:
    """Line ending inside a paragraph."""


@dataclass(frozen=True, slots=True)
class HardBreak:
    """Forced line break (two trailing spaces or a trailing backslash)."""


@dataclass(frozen=True, slots=True)
class Rule:
    """Thematic break.

    Markdown: ---

    """


type Event = (
    TextRun
    | CodeSpan
    | CodeBlockStart
    | CodeBlockEnd
    | Start
    | End
    | SoftBreak
    | HardBreak
    | Rule
)
