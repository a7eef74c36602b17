"""Live delivery test against the Telegram Bot API.

Sends every corpus message with ``parse_mode=MarkdownV2``. Telegram answers
400 for any unescaped reserved character, so a successful send proves the
output is valid. Skipped unless TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID are
set (a .env file is loaded if present).

Run with:
    pytest -m live tests/integration
"""

import os
import time

import pytest
import requests
from dotenv import load_dotenv

from telegram_escape import tg_escape

from .corpus import EDGE_CASES, EMPTY_PLACEHOLDER, MESSAGES

load_dotenv()

BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN")
CHAT_ID = os.getenv("TELEGRAM_CHAT_ID")

pytestmark = [
    pytest.mark.live,
    pytest.mark.skipif(
        not (BOT_TOKEN and CHAT_ID),
        reason="TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID not set",
    ),
]


def _send(text: str) -> dict:
    response = requests.post(
        f"https://api.telegram.org/bot{BOT_TOKEN}/sendMessage",
        json={"chat_id": CHAT_ID, "text": text, "parse_mode": "MarkdownV2"},
        timeout=10,
    )
    payload = response.json()
    assert payload.get("ok"), f"Telegram rejected {text!r}: {payload.get('description')}"
    return payload["result"]


@pytest.mark.parametrize("text", MESSAGES)
def test_send_escaped_message(text: str) -> None:
    message = _send(tg_escape(text))
    assert message["message_id"] > 0
    time.sleep(0.5)


@pytest.mark.parametrize(("description", "text"), EDGE_CASES)
def test_send_edge_case(description: str, text: str) -> None:
    escaped = tg_escape(text)
    _send(escaped or EMPTY_PLACEHOLDER)
    time.sleep(0.3)
