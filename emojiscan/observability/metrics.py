from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Tuple

from prometheus_client import REGISTRY, CollectorRegistry, Counter

_log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Metrics never raise into the scan path; failures are logged at debug.
# -----------------------------------------------------------------------------
def _best_effort(msg: str, fn: Callable[[], Any]) -> None:
    try:
        fn()
    except Exception as e:  # pragma: no cover
        _log.debug("%s: %s", msg, e)


def _get_or_create_counter(
    name: str,
    doc: str,
    labelnames: Tuple[str, ...] = (),
    registry: Optional[CollectorRegistry] = None,
) -> Counter:
    reg = registry or REGISTRY
    # Reuse an existing collector if already registered (module reloads).
    try:
        names_map = getattr(reg, "_names_to_collectors", None)
        if isinstance(names_map, dict):
            existing = names_map.get(name)
            if isinstance(existing, Counter):
                return existing
    except Exception as e:  # pragma: no cover
        _log.debug("reuse counter %s failed: %s", name, e)

    try:
        return Counter(name, doc, labelnames=labelnames, registry=reg)
    except ValueError:
        # Another module created it first; fetch and reuse.
        try:
            names_map = getattr(reg, "_names_to_collectors", None)
            if isinstance(names_map, dict):
                found = names_map.get(name)
                if isinstance(found, Counter):
                    return found
        except Exception as e:  # pragma: no cover
            _log.debug("fallback counter lookup %s failed: %s", name, e)
        # Final fallback: an unregistered counter (won't be exposed).
        return Counter(name, doc, labelnames=labelnames, registry=None)


# --- Scan metrics ---------------------------------------------------------------

_scans_total = _get_or_create_counter(
    "emojiscan_scans_total",
    "Texts scanned for emoji",
)
_scanned_bytes_total = _get_or_create_counter(
    "emojiscan_scanned_bytes_total",
    "UTF-8 bytes of text scanned for emoji",
)
_matches_total = _get_or_create_counter(
    "emojiscan_matches_total",
    "Emoji sequences resolved against the emoji table",
)
_unresolved_clusters_total = _get_or_create_counter(
    "emojiscan_unresolved_clusters_total",
    "Candidate clusters that matched no emoji and were dropped",
)


def scan_report(
    *,
    scanned_bytes: int = 0,
    matches: int = 0,
    unresolved: int = 0,
) -> None:
    def _do() -> None:
        _scans_total.inc()
        if scanned_bytes:
            _scanned_bytes_total.inc(scanned_bytes)
        if matches:
            _matches_total.inc(matches)
        if unresolved:
            _unresolved_clusters_total.inc(unresolved)

    _best_effort("inc emoji scan metrics", _do)
