"""Reading helpers for the bundled Unicode data files."""

from __future__ import annotations

from importlib import resources
from pathlib import Path
from typing import Optional, Tuple


def read_data_file(filename: str, path: Optional[str] = None) -> Tuple[str, str]:
    """Return ``(source, text)`` for ``path`` or the bundled ``data/<filename>``."""
    if path:
        return str(path), Path(path).read_text(encoding="utf-8")
    bundled = resources.files("emojiscan") / "data" / filename
    return filename, bundled.read_text(encoding="utf-8")


def header_version(txt: str) -> str:
    """Pick ``x.y`` out of the ``# Version: x.y`` line of a UCD file header."""
    for raw in txt.splitlines()[:16]:
        if not raw.startswith("#"):
            break
        _, sep, rest = raw.partition("Version:")
        if sep:
            return rest.strip()
    return ""
