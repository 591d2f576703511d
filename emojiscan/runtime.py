from __future__ import annotations

import logging
import threading
from typing import Optional

from emojiscan.classifier import UnicodeEmojiClassifier, load_classifier
from emojiscan.config import Settings, get_settings
from emojiscan.scanner import EmojiScanner
from emojiscan.table import EmojiTable, load_emoji_table

_log = logging.getLogger(__name__)

# Lazily initialized singletons for process lifetime.
_classifier: Optional[UnicodeEmojiClassifier] = None
_table: Optional[EmojiTable] = None
_scanner: Optional[EmojiScanner] = None
_lock = threading.Lock()


def init_emoji_data(settings: Optional[Settings] = None) -> EmojiScanner:
    """
    Load the Unicode data once and build the default scanner.

    Host applications may call this at startup to pay the loading cost up
    front; otherwise the first module-level ``find_emoji`` call does it.
    Later calls return the scanner built by the first one.
    """
    global _classifier, _table, _scanner
    if _scanner is not None:
        return _scanner

    with _lock:
        if _scanner is not None:
            return _scanner

        cfg = settings or get_settings()
        _classifier = load_classifier(cfg.EMOJI_DATA_PATH)
        _table = load_emoji_table(cfg.EMOJI_TEST_PATH)
        _scanner = EmojiScanner(_classifier, _table, metrics_enabled=cfg.METRICS_ENABLED)
        _log.info(
            "emoji data ready",
            extra={
                "unicode_version": _classifier.version,
                "emoji_version": _table.version,
                "metrics_enabled": cfg.METRICS_ENABLED,
            },
        )
        return _scanner


def get_scanner() -> EmojiScanner:
    if _scanner is not None:
        return _scanner
    return init_emoji_data()


def get_table() -> EmojiTable:
    get_scanner()
    assert _table is not None
    return _table


def get_classifier() -> UnicodeEmojiClassifier:
    get_scanner()
    assert _classifier is not None
    return _classifier


def reset_emoji_data() -> None:
    """Drop the cached singletons so the next call reloads (tests only)."""
    global _classifier, _table, _scanner
    with _lock:
        _classifier = None
        _table = None
        _scanner = None
