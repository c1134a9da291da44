"""Splices resolved URLs back into the original text."""

from __future__ import annotations
import io
from typing import Iterable, TextIO

from .types import Replacement


def replace_all(out: TextIO, text: str, replacements: Iterable[Replacement]) -> None:
    """Write text to out with each replacement substituted.

    Replacements must be sorted by start and must not overlap.  Everything
    outside them is copied verbatim.  Write and flush errors propagate.
    """
    cursor = 0
    for r in replacements:
        out.write(text[cursor:r.start])
        out.write(r.text)
        cursor = r.end
    out.write(text[cursor:])
    out.flush()


def render(text: str, replacements: Iterable[Replacement]) -> str:
    """Same as replace_all, but returns the output as a string."""
    buf = io.StringIO()
    replace_all(buf, text, replacements)
    return buf.getvalue()
