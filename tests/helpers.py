"""Test doubles shared by the test modules."""

from __future__ import annotations
import threading

from fixred.errors import ResolveError
from fixred.filters import FilterConfig


class FooToPiyoResolver:
    """Simulates the redirect chain foo -> bar -> piyo and counts calls."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def resolve(self, url: str, config: FilterConfig) -> str | None:
        with self._lock:
            self.calls.append(url)
        new = url.replace("foo", "bar" if config.shallow else "piyo")
        return new if new != url else None


class MappingResolver:
    """Resolves from a fixed dict. URLs mapped to an exception raise it."""

    def __init__(self, mapping: dict[str, object]) -> None:
        self.mapping = mapping
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def resolve(self, url: str, config: FilterConfig) -> str | None:
        with self._lock:
            self.calls.append(url)
        target = self.mapping.get(url)
        if isinstance(target, Exception):
            raise ResolveError(url, target)
        return target


class MovedResolver:
    """Every URL redirects to <url>/moved."""

    def resolve(self, url: str, config: FilterConfig) -> str | None:
        return url.rstrip("/") + "/moved"


class WriteErrorWriter:
    def write(self, s: str) -> int:
        raise OSError("write failed")

    def flush(self) -> None:
        pass


class FlushErrorWriter:
    def write(self, s: str) -> int:
        return len(s)

    def flush(self) -> None:
        raise OSError("flush failed")


class ClosingResolver(FooToPiyoResolver):
    """FooToPiyoResolver that records close() calls."""

    def __init__(self) -> None:
        super().__init__()
        self.closed = 0

    def close(self) -> None:
        self.closed += 1
