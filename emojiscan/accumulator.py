"""Cluster accumulator: the per-character state machine behind the scanner.

The accumulator groups emoji-relevant characters into candidate clusters
and emits each cluster when a boundary is seen. It knows nothing about the
emoji table; the scanner decides which clusters are real emoji.

Boundary rules, per character:

* ASCII without emoji presentation closes the open cluster and is skipped.
* After ZWJ / VS15 / VS16 the next character is always taken as a
  continuation (``JOINER_PENDING``).
* Otherwise a non-joiner closes the open cluster, unless the previous
  character was a base emoji and this one is an emoji component
  (skin tones, regional indicators, hair components).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import List, Optional

from emojiscan.classifier import CharClassifier, EmojiProperty, is_joiner_or_selector

__all__ = ["Cluster", "ClusterState", "ClusterAccumulator", "utf8_len"]


class ClusterState(enum.Enum):
    EMPTY = "empty"
    BUILDING = "building"
    JOINER_PENDING = "joiner_pending"


@dataclass(frozen=True)
class Cluster:
    """A flushed candidate cluster and where it started in the input."""

    text: str
    start: int
    end: int
    char_start: int
    char_end: int


def utf8_len(ch: str) -> int:
    cp = ord(ch)
    if cp < 0x80:
        return 1
    if cp < 0x800:
        return 2
    if cp < 0x10000:
        return 3
    return 4


class ClusterAccumulator:
    """Owns one in-flight cluster buffer. Create one per scan."""

    def __init__(self, classifier: CharClassifier) -> None:
        self._classifier = classifier
        self._buffer: List[str] = []
        self._byte_len = 0
        self.start = 0
        self.char_start = 0
        self.state = ClusterState.EMPTY
        self.previous_was_emoji = False

    @property
    def pending(self) -> str:
        return "".join(self._buffer)

    def push(self, ch: str, offset: int, index: int) -> Optional[Cluster]:
        """
        Feed one character at byte ``offset`` / str ``index``.

        Returns the cluster closed by this character, if any. At most one
        cluster closes per character.
        """
        cp = ord(ch)

        # ASCII fast path
        if cp < 0x80 and not self._classifier.has_emoji_presentation(ch):
            self.previous_was_emoji = False
            if self._buffer:
                return self._flush()
            self.start = offset
            self.char_start = index
            return None

        props = self._classifier.properties(ch)
        flushed: Optional[Cluster] = None

        if self.state is not ClusterState.JOINER_PENDING:
            if not self._buffer:
                self.start = offset
                self.char_start = index
            elif is_joiner_or_selector(ch):
                self._append(ch)
                self.state = ClusterState.JOINER_PENDING
                return None
            elif not (self.previous_was_emoji and props & EmojiProperty.COMPONENT):
                flushed = self._flush()

        if self._buffer:
            self.state = ClusterState.BUILDING

        if props:
            if not self._buffer:
                self.start = offset
                self.char_start = index
            self._append(ch)
            self.state = ClusterState.BUILDING

        self.previous_was_emoji = bool(props & EmojiProperty.EMOJI)
        return flushed

    def finish(self) -> Optional[Cluster]:
        """Flush whatever is left at end of input."""
        if self._buffer:
            return self._flush()
        return None

    def _append(self, ch: str) -> None:
        self._buffer.append(ch)
        self._byte_len += utf8_len(ch)

    def _flush(self) -> Cluster:
        text = "".join(self._buffer)
        cluster = Cluster(
            text=text,
            start=self.start,
            end=self.start + self._byte_len,
            char_start=self.char_start,
            char_end=self.char_start + len(self._buffer),
        )
        self._buffer.clear()
        self._byte_len = 0
        self.state = ClusterState.EMPTY
        return cluster
