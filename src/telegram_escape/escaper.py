"""Context-sensitive escaping of literal payloads in an event stream.

Only ``TextRun`` and ``CodeSpan`` payloads are rewritten. Structural events
(emphasis, links, code block boundaries, ...) pass through untouched so the
serializer re-emits them as real syntax.

Charset selection:
    CodeSpan                      -> CODE_RESERVED  (` and \\)
    TextRun inside a code block   -> CODE_RESERVED
    TextRun elsewhere             -> TEXT_RESERVED

Single-character payloads are skipped: the serializer escapes those itself,
and escaping them here too would double the backslash.

Example:
    >>> from telegram_escape.events import TextRun
    >>> list(escape_events([TextRun("a_b")]))
    [TextRun(content='a\\\\_b')]

"""

import re
from collections.abc import Iterable, Iterator

from telegram_escape.charsets import CODE_PATTERN, TEXT_PATTERN
from telegram_escape.events import CodeBlockEnd, CodeBlockStart, CodeSpan, Event, TextRun


def escape_text(content: str, pattern: re.Pattern[str]) -> str:
    """Insert a backslash before every character matched by pattern.

    Args:
        content: Payload to escape
        pattern: One of the compiled charset patterns

    Returns:
        Escaped payload (the same object when nothing matched)
    """
    if pattern.search(content) is None:
        return content
    return pattern.sub(r"\\\g<0>", content)


def escape_events(events: Iterable[Event]) -> Iterator[Event]:
    """Escape literal payloads of an event stream.

    Yields exactly one event per input event, in the same order. Events
    that need no change are yielded as the original objects.

    Args:
        events: Stream from ``parse_events``

    Yields:
        Events with escaped TextRun/CodeSpan payloads
    """
    inside_code_block = False

    for event in events:
        match event:
            case CodeBlockStart():
                inside_code_block = True
            case CodeBlockEnd():
                inside_code_block = False
            case TextRun(content=content) | CodeSpan(content=content) if len(content) > 1:
                code = inside_code_block or isinstance(event, CodeSpan)
                escaped = escape_text(content, CODE_PATTERN if code else TEXT_PATTERN)
                if escaped is not content:
                    event = type(event)(escaped)
        yield event
