"""Thread safety tests for tg_escape.

The pipeline keeps all state local to each call and reads configuration from
a ContextVar. These tests use real threads to catch shared-state bugs.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

from telegram_escape import EscapeConfig, escape_config_context, tg_escape
from tests.integration.corpus import MESSAGES


class TestConcurrentEscaping:
    def test_concurrent_matches_sequential(self) -> None:
        inputs = MESSAGES * 10
        expected = [tg_escape(text) for text in inputs]

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(tg_escape, inputs))

        assert results == expected

    def test_config_isolated_per_thread(self) -> None:
        barrier = threading.Barrier(4)
        errors: list[str] = []

        def run(count: int) -> None:
            fence = "`" * count
            with escape_config_context(EscapeConfig(code_block_token_count=count)):
                barrier.wait()
                for _ in range(50):
                    out = tg_escape("```\nx\n```")
                    if out != f"{fence}\nx\n{fence}":
                        errors.append(f"thread {count}: {out!r}")

        threads = [threading.Thread(target=run, args=(n,)) for n in (3, 4, 5, 6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
