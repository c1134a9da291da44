"""Finds http(s) links embedded in free-form text.

No URI grammar here.  A scheme literal is located first, then the text
after it is walked one character at a time using the character sets of
RFC 3986 §2:

    unreserved  = ALPHA / DIGIT / "-" / "." / "_" / "~"
    gen-delims  = ":" / "/" / "?" / "#" / "[" / "]" / "@"
    sub-delims  = "!" / "$" / "&" / "'" / "(" / ")" / "*" / "+" / "," / ";" / "="
    pct-encoded = "%" HEXDIG HEXDIG

Characters that commonly close a sentence or a Markdown link (".", "!",
")", ...) are accepted inside a URL but never as its last character.
"""

from __future__ import annotations
import enum
import re
import unicodedata

from .types import UrlSpan

_SCHEME = re.compile(r"https?://")

# Valid as the last character of a URL (in addition to alphanumerics)
_TERMINAL = frozenset("-_~/=")
# Combining marks (vowel signs, viramas) belong to the letter before them
_MARKS = frozenset(("Mn", "Mc"))
# Valid inside a URL, but only kept when a terminal character follows
_NON_TERMINAL = frozenset(".:?#[]@!$&'()*+,;%")


class _Char(enum.Enum):
    INVALID = 0
    TERMINAL = 1
    NON_TERMINAL = 2


def _char_kind(c: str) -> _Char:
    if c.isalnum() or c in _TERMINAL:
        return _Char.TERMINAL
    if unicodedata.category(c) in _MARKS:
        return _Char.TERMINAL
    if c in _NON_TERMINAL:
        return _Char.NON_TERMINAL
    return _Char.INVALID


def _scan_end(text: str, pos: int) -> int | None:
    """Return the end of the URL body starting at pos, or None if it is empty."""
    end = None
    for i in range(pos, len(text)):
        kind = _char_kind(text[i])
        if kind is _Char.INVALID:
            break
        if kind is _Char.TERMINAL:
            end = i + 1
    return end


def find_all_urls(text: str) -> list[UrlSpan]:
    """Find all URLs in text. Returns non-overlapping spans in ascending order.

    The first match wins: scanning for the next scheme resumes at the end
    of the previous URL, so "https://a.example/?to=https://b.example" is
    one span, not two overlapping ones.
    """
    spans: list[UrlSpan] = []
    pos = 0
    while True:
        m = _SCHEME.search(text, pos)
        if m is None:
            break
        end = _scan_end(text, m.end())
        if end is None:
            # Scheme only, e.g. "'https://'" in source code
            pos = m.end()
            continue
        spans.append(UrlSpan(m.start(), end))
        pos = end
    return spans
