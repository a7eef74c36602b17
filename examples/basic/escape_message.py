"""Escape a chat message for MarkdownV2 in one call."""

from telegram_escape import tg_escape

message = "Done! Run /get_stat for details, or check `config_v2.yaml` (v1.2)."
print(tg_escape(message))
