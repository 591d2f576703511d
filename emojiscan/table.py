"""Canonical emoji records and the glyph -> record lookup table."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from emojiscan._ucd import header_version, read_data_file
from emojiscan.errors import EmojiDataError

__all__ = [
    "Emoji",
    "EmojiTable",
    "parse_emoji_test",
    "load_emoji_table",
]

_log = logging.getLogger(__name__)

DEFAULT_TABLE_FILE = "emoji-test.txt"

FULLY_QUALIFIED = "fully-qualified"
MINIMALLY_QUALIFIED = "minimally-qualified"
UNQUALIFIED = "unqualified"
COMPONENT = "component"

_STATUSES = {FULLY_QUALIFIED, MINIMALLY_QUALIFIED, UNQUALIFIED, COMPONENT}
# Unicode 17 renamed the component status
_STATUS_ALIASES = {"standalone_component": COMPONENT}


@dataclass(frozen=True)
class Emoji:
    """One emoji sequence as listed in ``emoji-test.txt``."""

    name: str
    canonical_text: str
    status: str = FULLY_QUALIFIED
    group: str = ""
    subgroup: str = ""
    version: str = ""

    @property
    def glyph(self) -> str:
        return self.canonical_text

    @property
    def codepoints(self) -> Tuple[int, ...]:
        return tuple(ord(ch) for ch in self.canonical_text)

    @property
    def is_fully_qualified(self) -> bool:
        return self.status == FULLY_QUALIFIED

    def __str__(self) -> str:
        return self.canonical_text


class EmojiTable:
    """Exact-match lookup from literal text to :class:`Emoji`.

    Built once and never mutated; safe to share between threads.
    """

    __slots__ = ("_by_text", "_by_name", "version")

    def __init__(self, records: Iterable[Emoji], *, version: str = "") -> None:
        by_text: Dict[str, Emoji] = {}
        by_name: Dict[str, Emoji] = {}
        for record in records:
            # First occurrence wins; emoji-test.txt lists the fully-qualified form first.
            by_text.setdefault(record.canonical_text, record)
            by_name.setdefault(record.name, record)
        self._by_text = by_text
        self._by_name = by_name
        self.version = version

    @classmethod
    def from_emoji_test(cls, txt: str, *, source: str = DEFAULT_TABLE_FILE) -> "EmojiTable":
        return cls(parse_emoji_test(txt, source=source), version=header_version(txt))

    def lookup(self, text: str) -> Optional[Emoji]:
        return self._by_text.get(text)

    def lookup_by_name(self, name: str) -> Optional[Emoji]:
        return self._by_name.get(name)

    def __len__(self) -> int:
        return len(self._by_text)

    def __contains__(self, text: object) -> bool:
        return text in self._by_text

    def __iter__(self) -> Iterator[Emoji]:
        return iter(self._by_text.values())


def _parse_comment(comment: str, *, source: str, lineno: int) -> Tuple[str, str]:
    # "<glyph> E<version> <name>"
    parts = comment.split(None, 2)
    if len(parts) < 3 or not parts[1].startswith("E"):
        raise EmojiDataError("expected '# <glyph> E<version> <name>'", source=source, lineno=lineno)
    return parts[1], parts[2].strip()


def parse_emoji_test(txt: str, *, source: str = DEFAULT_TABLE_FILE) -> List[Emoji]:
    """
    Parse ``emoji-test.txt``::

        # group: Smileys & Emotion
        # subgroup: face-smiling
        1F600 ; fully-qualified # 😀 E1.0 grinning face

    Records are returned in file order.
    """
    records: List[Emoji] = []
    group = ""
    subgroup = ""
    for lineno, raw in enumerate(txt.splitlines(), start=1):
        data, _, comment = raw.partition("#")
        data = data.strip()
        if not data:
            header = comment.strip()
            if header.startswith("group:"):
                group = header.split(":", 1)[1].strip()
                subgroup = ""
            elif header.startswith("subgroup:"):
                subgroup = header.split(":", 1)[1].strip()
            continue

        parts = data.split(";", 1)
        if len(parts) < 2:
            raise EmojiDataError("expected 'codepoints ; status'", source=source, lineno=lineno)
        hex_codes, status = parts[0].split(), parts[1].strip()
        status = _STATUS_ALIASES.get(status, status)
        if status not in _STATUSES:
            raise EmojiDataError(f"unknown status {status!r}", source=source, lineno=lineno)

        try:
            text = "".join(chr(int(h, 16)) for h in hex_codes)
        except ValueError:
            raise EmojiDataError(
                f"bad code points {parts[0].strip()!r}", source=source, lineno=lineno
            ) from None
        if not text:
            raise EmojiDataError("empty code point sequence", source=source, lineno=lineno)

        version, name = _parse_comment(comment, source=source, lineno=lineno)
        records.append(
            Emoji(
                name=name,
                canonical_text=text,
                status=status,
                group=group,
                subgroup=subgroup,
                version=version,
            )
        )
    return records


def load_emoji_table(path: Optional[str] = None) -> EmojiTable:
    """Load the bundled ``emoji-test.txt``, or ``path`` when given."""
    source, txt = read_data_file(DEFAULT_TABLE_FILE, path)
    table = EmojiTable.from_emoji_test(txt, source=source)
    _log.info(
        "loaded emoji table",
        extra={"source": source, "entries": len(table), "emoji_version": table.version},
    )
    return table
