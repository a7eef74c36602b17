"""Look at each pipeline stage and switch markers with a config context."""

from telegram_escape import (
    EscapeConfig,
    escape_config_context,
    escape_events,
    parse_events,
    serialize_events,
    tg_escape,
)

source = "# Release 1.2\n\n*New*: `run_all()` is ~~slow~~ fast!"

events = list(parse_events(source))
escaped = list(escape_events(events))

for before, after in zip(events, escaped, strict=True):
    marker = "  " if before is after else "=>"
    print(f"{marker} {before!r} -> {after!r}")

print()
print(serialize_events(escaped))

# Classic Markdown markers, e.g. for clients that expect *italic* and **bold**
with escape_config_context(EscapeConfig(emphasis_token="*", strong_token="**", strikethrough_token="~~")):
    print(tg_escape(source))
