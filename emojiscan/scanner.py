from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from emojiscan.accumulator import Cluster, ClusterAccumulator, utf8_len
from emojiscan.classifier import CharClassifier
from emojiscan.observability.metrics import scan_report
from emojiscan.table import Emoji, EmojiTable

__all__ = ["EmojiMatch", "EmojiScanner"]

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmojiMatch:
    """An emoji found in the input.

    ``start``/``end`` are UTF-8 byte offsets (half-open); ``char_start`` and
    ``char_end`` are the same span as ``str`` indices.
    """

    emoji: Emoji
    start: int
    end: int
    char_start: int
    char_end: int

    @property
    def span(self) -> Tuple[int, int]:
        return self.start, self.end

    @property
    def byte_range(self) -> range:
        return range(self.start, self.end)


class EmojiScanner:
    """Finds emoji in text using an injected classifier and table.

    Both collaborators are read-only, so one scanner can serve any number of
    threads; every call builds its own accumulator.
    """

    def __init__(
        self,
        classifier: CharClassifier,
        table: EmojiTable,
        *,
        metrics_enabled: bool = True,
    ) -> None:
        self.classifier = classifier
        self.table = table
        self.metrics_enabled = metrics_enabled

    def iter_matches(self, text: str) -> Iterator[EmojiMatch]:
        """Yield matches left to right in a single pass over ``text``."""
        for cluster, emoji in self._resolve(text):
            if emoji is not None:
                yield _to_match(cluster, emoji)

    def find_emoji_with_ranges(self, text: str) -> List[EmojiMatch]:
        matches: List[EmojiMatch] = []
        unresolved = 0
        for cluster, emoji in self._resolve(text):
            if emoji is None:
                unresolved += 1
            else:
                matches.append(_to_match(cluster, emoji))
        if self.metrics_enabled:
            scan_report(
                scanned_bytes=len(text.encode("utf-8", errors="surrogatepass")),
                matches=len(matches),
                unresolved=unresolved,
            )
        return matches

    def find_emoji(self, text: str) -> List[Emoji]:
        return [m.emoji for m in self.find_emoji_with_ranges(text)]

    def _resolve(self, text: str) -> Iterator[Tuple[Cluster, Optional[Emoji]]]:
        if not isinstance(text, str):
            raise TypeError(f"expected str, got {type(text).__name__}")

        acc = ClusterAccumulator(self.classifier)
        lookup = self.table.lookup
        debug = _log.isEnabledFor(logging.DEBUG)
        offset = 0
        for index, ch in enumerate(text):
            cluster = acc.push(ch, offset, index)
            if cluster is not None:
                emoji = lookup(cluster.text)
                if emoji is None and debug:
                    _log.debug("unresolved cluster", extra={"cluster": _hex(cluster.text)})
                yield cluster, emoji
            offset += utf8_len(ch)

        cluster = acc.finish()
        if cluster is not None:
            emoji = lookup(cluster.text)
            if emoji is None and debug:
                _log.debug("unresolved cluster", extra={"cluster": _hex(cluster.text)})
            yield cluster, emoji


def _to_match(cluster: Cluster, emoji: Emoji) -> EmojiMatch:
    return EmojiMatch(
        emoji=emoji,
        start=cluster.start,
        end=cluster.end,
        char_start=cluster.char_start,
        char_end=cluster.char_end,
    )


def _hex(text: str) -> str:
    return " ".join(f"{ord(ch):04X}" for ch in text)
