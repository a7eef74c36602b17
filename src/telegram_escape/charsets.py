"""Reserved character sets for Telegram MarkdownV2.

All sets are frozensets for:
- O(1) membership testing (single-character payloads)
- Immutability (thread-safe)
- Module-level caching (no per-call allocation)

Each set has a compiled pattern matching one reserved character, used to
insert escapes in multi-character payloads.

Reference: https://core.telegram.org/bots/api#markdownv2-style

Usage:
    from telegram_escape.charsets import TEXT_RESERVED, TEXT_PATTERN

    if char in TEXT_RESERVED:  # O(1) lookup
        ...
"""

import re

# Outside code: every character with a meaning in MarkdownV2.
# `<` is deliberately absent; MarkdownV2 gives it no meaning.
TEXT_RESERVED: frozenset[str] = frozenset("_*[]()~`>#+-=|{}.!\\")

# Inside `code` and ```pre``` entities only these two are special.
CODE_RESERVED: frozenset[str] = frozenset("`\\")

# Inside the (...) part of an inline link.
LINK_URL_RESERVED: frozenset[str] = frozenset(")\\")


def _pattern(chars: frozenset[str]) -> re.Pattern[str]:
    """Compile a character class matching any member of chars."""
    return re.compile("[" + "".join(re.escape(c) for c in sorted(chars)) + "]")


TEXT_PATTERN: re.Pattern[str] = _pattern(TEXT_RESERVED)
CODE_PATTERN: re.Pattern[str] = _pattern(CODE_RESERVED)
LINK_URL_PATTERN: re.Pattern[str] = _pattern(LINK_URL_RESERVED)
