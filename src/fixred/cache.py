"""ResolutionCache — run-scoped memo of URL → resolved URL.

Design goals:
  - Shared: one instance serves every resolution thread of a run
  - Tri-state: a missing key means "unknown", a None value means "known, no change"
  - Never persisted: the cache lives and dies with the process
"""

from __future__ import annotations
import threading


_MISSING = object()


class ResolutionCache:
    """Thread-safe URL → Optional[resolved URL] store."""

    __slots__ = ("_entries", "_lock")

    def __init__(self) -> None:
        self._entries: dict[str, str | None] = {}  # "http://a" → "https://b" | None
        # Held for single dict operations only, never across a network call
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------------

    def lookup(self, url: str) -> tuple[bool, str | None]:
        """Return (hit, value). A hit with value None means "no replacement"."""
        with self._lock:
            value = self._entries.get(url, _MISSING)
        if value is _MISSING:
            return False, None
        return True, value

    def put(self, url: str, resolved: str | None) -> str | None:
        """Store a result unless one is already present. Returns the stored value."""
        with self._lock:
            return self._entries.setdefault(url, resolved)

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._entries

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def dump(self) -> dict[str, str | None]:
        """Return a copy of the url→resolved mapping (for debugging)."""
        with self._lock:
            return dict(self._entries)
