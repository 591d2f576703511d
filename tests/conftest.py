# tests/conftest.py
from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from emojiscan import runtime  # noqa: E402
from emojiscan.classifier import UnicodeEmojiClassifier, load_classifier  # noqa: E402
from emojiscan.scanner import EmojiScanner  # noqa: E402
from emojiscan.table import EmojiTable, load_emoji_table  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_runtime(monkeypatch):
    # Keep developer .env / shell settings out of the tests.
    for name in (
        "EMOJISCAN_EMOJI_DATA_PATH",
        "EMOJISCAN_EMOJI_TEST_PATH",
        "EMOJISCAN_METRICS_ENABLED",
        "EMOJISCAN_LOG_JSON",
        "EMOJISCAN_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    runtime.reset_emoji_data()
    yield
    runtime.reset_emoji_data()


@pytest.fixture(scope="session")
def classifier() -> UnicodeEmojiClassifier:
    return load_classifier()


@pytest.fixture(scope="session")
def table() -> EmojiTable:
    return load_emoji_table()


@pytest.fixture(scope="session")
def scanner(classifier, table) -> EmojiScanner:
    return EmojiScanner(classifier, table, metrics_enabled=False)
