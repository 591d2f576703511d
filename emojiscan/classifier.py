"""Emoji character-property classification.

The classifier answers the five UTS #51 binary properties the cluster
accumulator needs. The production implementation is backed by the
``emoji-data.txt`` property ranges bundled under ``emojiscan/data``.
"""

from __future__ import annotations

import enum
import logging
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Tuple

from emojiscan._ucd import header_version, read_data_file
from emojiscan.errors import EmojiDataError

__all__ = [
    "ZWJ",
    "VS15",
    "VS16",
    "EmojiProperty",
    "CharClassifier",
    "UnicodeEmojiClassifier",
    "is_joiner_or_selector",
    "parse_emoji_data",
    "load_classifier",
]

_log = logging.getLogger(__name__)

# Code point constants (never looked up in the tables)
ZWJ = "\u200d"  # ZERO WIDTH JOINER
VS15 = "\ufe0e"  # VARIATION SELECTOR-15 (text presentation)
VS16 = "\ufe0f"  # VARIATION SELECTOR-16 (emoji presentation)

_JOINERS = frozenset((ZWJ, VS15, VS16))

DEFAULT_DATA_FILE = "emoji-data.txt"


class EmojiProperty(enum.IntFlag):
    NONE = 0
    EMOJI = 1
    COMPONENT = 2
    MODIFIER = 4
    MODIFIER_BASE = 8
    PRESENTATION = 16


# Property names as they appear in emoji-data.txt
_PROPERTY_NAMES: Dict[str, EmojiProperty] = {
    "Emoji": EmojiProperty.EMOJI,
    "Emoji_Component": EmojiProperty.COMPONENT,
    "Emoji_Modifier": EmojiProperty.MODIFIER,
    "Emoji_Modifier_Base": EmojiProperty.MODIFIER_BASE,
    "Emoji_Presentation": EmojiProperty.PRESENTATION,
}


class CharClassifier(Protocol):
    """Anything that can answer the emoji property questions for one character."""

    def properties(self, ch: str) -> EmojiProperty: ...

    def is_emoji(self, ch: str) -> bool: ...

    def is_emoji_component(self, ch: str) -> bool: ...

    def is_emoji_modifier(self, ch: str) -> bool: ...

    def is_emoji_modifier_base(self, ch: str) -> bool: ...

    def has_emoji_presentation(self, ch: str) -> bool: ...


def is_joiner_or_selector(ch: str) -> bool:
    """True for ZWJ and the two variation selectors."""
    return ch in _JOINERS


class UnicodeEmojiClassifier:
    """Classifier over a fixed set of property ranges.

    Ranges are expanded into a codepoint -> flags map once, so every query
    is a single dict lookup and the instance is read-only afterwards.
    """

    __slots__ = ("_flags", "version")

    def __init__(
        self,
        ranges: Iterable[Tuple[int, int, EmojiProperty]],
        *,
        version: str = "",
    ) -> None:
        flags: Dict[int, EmojiProperty] = {}
        for start, end, prop in ranges:
            if start > end:
                raise ValueError(f"empty range {start:04X}..{end:04X}")
            for cp in range(start, end + 1):
                flags[cp] = flags.get(cp, EmojiProperty.NONE) | prop
        self._flags: Mapping[int, EmojiProperty] = flags
        self.version = version

    @classmethod
    def from_ranges(
        cls,
        ranges: Mapping[EmojiProperty, Iterable[Tuple[str, str]]],
        *,
        version: str = "",
    ) -> "UnicodeEmojiClassifier":
        """Build from ``{EmojiProperty.X: [("a", "z"), ...]}`` character ranges."""
        expanded: List[Tuple[int, int, EmojiProperty]] = []
        for prop, pairs in ranges.items():
            for lo, hi in pairs:
                expanded.append((ord(lo), ord(hi), prop))
        return cls(expanded, version=version)

    @classmethod
    def from_emoji_data(cls, txt: str, *, source: str = DEFAULT_DATA_FILE) -> "UnicodeEmojiClassifier":
        return cls(parse_emoji_data(txt, source=source), version=header_version(txt))

    def __len__(self) -> int:
        return len(self._flags)

    def properties(self, ch: str) -> EmojiProperty:
        return self._flags.get(ord(ch), EmojiProperty.NONE)

    def is_emoji(self, ch: str) -> bool:
        return bool(self.properties(ch) & EmojiProperty.EMOJI)

    def is_emoji_component(self, ch: str) -> bool:
        return bool(self.properties(ch) & EmojiProperty.COMPONENT)

    def is_emoji_modifier(self, ch: str) -> bool:
        return bool(self.properties(ch) & EmojiProperty.MODIFIER)

    def is_emoji_modifier_base(self, ch: str) -> bool:
        return bool(self.properties(ch) & EmojiProperty.MODIFIER_BASE)

    def has_emoji_presentation(self, ch: str) -> bool:
        return bool(self.properties(ch) & EmojiProperty.PRESENTATION)


def parse_emoji_data(txt: str, *, source: str = DEFAULT_DATA_FILE) -> List[Tuple[int, int, EmojiProperty]]:
    """
    Parse ``emoji-data.txt`` style lines::

        1F3FB..1F3FF  ; Emoji_Modifier  # comment

    Properties this package does not use (e.g. Extended_Pictographic)
    are skipped.
    """
    out: List[Tuple[int, int, EmojiProperty]] = []
    for lineno, raw in enumerate(txt.splitlines(), start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue

        parts = line.split(";", 1)
        if len(parts) < 2:
            raise EmojiDataError("expected 'range ; property'", source=source, lineno=lineno)
        code_range, prop_name = parts[0].strip(), parts[1].strip()

        prop = _PROPERTY_NAMES.get(prop_name)
        if prop is None:
            continue

        try:
            if ".." in code_range:
                a, b = code_range.split("..", 1)
                start, end = int(a, 16), int(b, 16)
            else:
                start = end = int(code_range, 16)
        except ValueError:
            raise EmojiDataError(
                f"bad code point range {code_range!r}", source=source, lineno=lineno
            ) from None
        if start > end or end > 0x10FFFF:
            raise EmojiDataError(
                f"bad code point range {code_range!r}", source=source, lineno=lineno
            )
        out.append((start, end, prop))
    return out


def load_classifier(path: Optional[str] = None) -> UnicodeEmojiClassifier:
    """Load the bundled property file, or ``path`` when given."""
    source, txt = read_data_file(DEFAULT_DATA_FILE, path)
    classifier = UnicodeEmojiClassifier.from_emoji_data(txt, source=source)
    _log.info(
        "loaded emoji properties",
        extra={"source": source, "codepoints": len(classifier), "unicode_version": classifier.version},
    )
    return classifier
