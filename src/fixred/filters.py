"""Eligibility filter for discovered URLs."""

from __future__ import annotations
import re
from dataclasses import dataclass

from .errors import ConfigError


@dataclass(frozen=True, slots=True)
class FilterConfig:
    """Which URLs to resolve, and how deep.

    A URL is eligible when it matches ``extract`` (if set) and does not
    match ``ignore`` (if set).  Patterns are searched anywhere in the URL.
    """
    extract: re.Pattern[str] | None = None   # allow-list
    ignore: re.Pattern[str] | None = None    # deny-list
    shallow: bool = False                    # follow only the first redirect hop

    @classmethod
    def from_patterns(
        cls,
        extract: str | None = None,
        ignore: str | None = None,
        *,
        shallow: bool = False,
    ) -> "FilterConfig":
        """Compile pattern strings. Raises ConfigError on bad syntax."""
        return cls(
            extract=_compile("extract", extract),
            ignore=_compile("ignore", ignore),
            shallow=shallow,
        )

    def is_eligible(self, url: str) -> bool:
        if self.extract is not None and not self.extract.search(url):
            return False
        if self.ignore is not None and self.ignore.search(url):
            return False
        return True


def _compile(option: str, pattern: str | None) -> re.Pattern[str] | None:
    if not pattern:
        return None
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigError(f"invalid {option} pattern {pattern!r}: {e}") from e
