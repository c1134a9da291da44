"""Core types."""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class UrlSpan:
    """Half-open range [start, end) of a URL inside a text buffer."""
    start: int
    end: int

    def slice(self, text: str) -> str:
        return text[self.start:self.end]


@dataclass(frozen=True, slots=True)
class Replacement:
    """Resolved text to substitute for text[start:end]."""
    start: int
    end: int
    text: str


@dataclass(frozen=True, slots=True)
class FileTask:
    """A file and its decoded content, alive for one pass of the batch."""
    path: Path
    content: str


@dataclass(slots=True)
class FixedText:
    """Result of fixing one buffer."""
    text: str                                              # rendered output
    replacements: list[Replacement] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.replacements)
