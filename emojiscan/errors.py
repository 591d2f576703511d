"""Exception types raised by emojiscan.

Scanning itself never raises on decoded text; these cover data loading.
"""

from __future__ import annotations

from typing import Optional

__all__ = ["EmojiScanError", "EmojiDataError"]


class EmojiScanError(Exception):
    """Base class for all emojiscan errors."""


class EmojiDataError(EmojiScanError, ValueError):
    """A Unicode data file could not be parsed."""

    def __init__(
        self,
        detail: str,
        *,
        source: Optional[str] = None,
        lineno: Optional[int] = None,
    ) -> None:
        self.detail = detail
        self.source = source
        self.lineno = lineno
        where = source or "<data>"
        if lineno is not None:
            where = f"{where}:{lineno}"
        super().__init__(f"{where}: {detail}")
