"""Exception hierarchy.

Only the CLI catches these; library code lets them propagate.
"""

from __future__ import annotations
from pathlib import Path


class FixredError(Exception):
    """Base class for all errors raised by fixred."""


class ConfigError(FixredError):
    """Invalid configuration, e.g. a malformed --extract/--ignore pattern."""


class ResolveError(FixredError):
    """A URL could not be resolved (network failure, invalid URL, ...)."""

    def __init__(self, url: str, reason: object) -> None:
        super().__init__(f"could not resolve {url}: {reason}")
        self.url = url
        self.reason = reason


class FileAccessError(FixredError):
    """Reading, writing or listing a path failed. Fatal for a batch."""

    def __init__(self, path: str | Path, operation: str, cause: OSError) -> None:
        super().__init__(f"could not {operation} {path}: {cause.strerror or cause}")
        self.path = Path(path)
        self.operation = operation
        self.cause = cause
