# emojiscan/__init__.py
"""
Find emoji in strings, including ZWJ sequences, flags, skin-tone modifier
sequences and variation-selected glyphs.

    >>> import emojiscan
    >>> [e.name for e in emojiscan.find_emoji("hi 👋🏽")]
    ['waving hand: medium skin tone']

The module-level functions use process-wide Unicode data loaded on first
use (see ``emojiscan.runtime.init_emoji_data``). Build an
``EmojiScanner`` directly to inject a different classifier or table.
"""

from __future__ import annotations

from typing import List

from emojiscan.classifier import (
    VS15,
    VS16,
    ZWJ,
    CharClassifier,
    EmojiProperty,
    UnicodeEmojiClassifier,
    load_classifier,
)
from emojiscan.errors import EmojiDataError, EmojiScanError
from emojiscan.runtime import get_scanner, init_emoji_data
from emojiscan.scanner import EmojiMatch, EmojiScanner
from emojiscan.table import Emoji, EmojiTable, load_emoji_table

__all__ = [
    "find_emoji",
    "find_emoji_with_ranges",
    "Emoji",
    "EmojiMatch",
    "EmojiScanner",
    "EmojiTable",
    "CharClassifier",
    "EmojiProperty",
    "UnicodeEmojiClassifier",
    "EmojiScanError",
    "EmojiDataError",
    "init_emoji_data",
    "get_scanner",
    "load_classifier",
    "load_emoji_table",
    "ZWJ",
    "VS15",
    "VS16",
]


def find_emoji(text: str) -> List[Emoji]:
    """Return every emoji in ``text``, left to right."""
    return get_scanner().find_emoji(text)


def find_emoji_with_ranges(text: str) -> List[EmojiMatch]:
    """Like :func:`find_emoji`, with the UTF-8 byte span of each match."""
    return get_scanner().find_emoji_with_ranges(text)
