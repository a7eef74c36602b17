"""GFM strikethrough for markdown-it: ``~x~`` as well as ``~~x~~``.

markdown-it's built-in rule only pairs double tildes. GitHub Flavored
Markdown, and Telegram's own ``~`` marker, also treat single tildes as
strikethrough. Opening and closing runs must have the same length; runs of
three or more tildes are never markers.

Usage:
    >>> md = MarkdownIt("commonmark").use(strikethrough_plugin)
    >>> [t.type for t in md.parseInline("~x~")[0].children]
    ['s_open', 'text', 's_close']

"""

from markdown_it import MarkdownIt
from markdown_it.rules_inline import StateInline
from markdown_it.rules_inline.state_inline import Delimiter

_TILDE = ord("~")
_MAX_RUN = 2


def strikethrough_plugin(md: MarkdownIt) -> None:
    """Register single- and double-tilde strikethrough on md."""
    md.inline.ruler.before("emphasis", "tilde_strikethrough", _tokenize)
    md.inline.ruler2.before("emphasis", "tilde_strikethrough", _post_process)


def _tokenize(state: StateInline, silent: bool) -> bool:
    """Push each tilde run as a text token; short runs become delimiters."""
    if silent or state.src[state.pos] != "~":
        return False

    scanned = state.scanDelims(state.pos, True)
    token = state.push("text", "", 0)
    token.content = "~" * scanned.length

    if scanned.length <= _MAX_RUN:
        state.delimiters.append(
            Delimiter(
                marker=_TILDE,
                length=0,  # turns off the emphasis "rule of 3"
                token=len(state.tokens) - 1,
                end=-1,
                open=scanned.can_open,
                close=scanned.can_close,
            )
        )

    state.pos += scanned.length
    return True


def _post_process(state: StateInline) -> None:
    _pair(state, state.delimiters)
    for meta in state.tokens_meta:
        if meta and "delimiters" in meta:
            _pair(state, meta["delimiters"])


def _pair(state: StateInline, delimiters: list[Delimiter]) -> None:
    """Turn matched delimiter tokens into s_open/s_close."""
    for opener in delimiters:
        if opener.marker != _TILDE or opener.end == -1:
            continue

        start = state.tokens[opener.token]
        end = state.tokens[delimiters[opener.end].token]
        # ~x~~ is not strikethrough; both runs stay text
        if start.content != end.content:
            continue

        markup = start.content
        for token, kind, nesting in ((start, "s_open", 1), (end, "s_close", -1)):
            token.type = kind
            token.tag = "s"
            token.nesting = nesting
            token.markup = markup
            token.content = ""
