"""Redirector — the main API.  Scan, resolve in parallel, replace.

Usage:
    from fixred import Redirector, FilterConfig

    red = Redirector.create(FilterConfig.from_patterns(extract=r"github\\.com/"))

    result = red.fix("See http://github.com/rhysd/fixred")
    print(result.text)       # "See https://github.com/rhysd/fixred"
    print(result.count)      # 1

    red.fix_all_files(["docs", "README.md"])   # rewrites files in place
"""

from __future__ import annotations
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Iterator, TextIO

from .errors import ConfigError, FileAccessError
from .filters import FilterConfig
from .replace import render, replace_all
from .resolve import DEFAULT_TIMEOUT, RedirectResolver, RequestsResolver
from .scanner import find_all_urls
from .types import FileTask, FixedText, Replacement

logger = logging.getLogger(__name__)


def default_workers() -> int:
    return min(32, (os.cpu_count() or 1) + 4)


class Redirector:
    """Fixes redirected links in text buffers and files.

    Within one buffer, URLs are resolved concurrently by a thread pool.
    Files of a batch are processed one at a time.  The pool lives as long
    as the redirector, so worker threads and their HTTP sessions are
    reused from one file to the next; close() releases them.
    """

    def __init__(self, resolver: RedirectResolver, *, workers: int | None = None) -> None:
        if workers is not None and workers < 1:
            raise ConfigError(f"workers must be at least 1, got {workers}")
        self.resolver = resolver
        self.workers = workers if workers is not None else default_workers()
        self._pool: ThreadPoolExecutor | None = None

    def __enter__(self) -> "Redirector":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Shut down the worker pool and close the resolver's connections."""
        if self._pool is not None:
            self._pool.shutdown(wait=True)
            self._pool = None
        self.resolver.close()

    def _executor(self) -> ThreadPoolExecutor:
        if self._pool is None:
            self._pool = ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="fixred")
        return self._pool

    @classmethod
    def create(
        cls,
        config: FilterConfig | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        workers: int | None = None,
    ) -> "Redirector":
        """Factory — network-backed redirector with a fresh cache."""
        resolver = RedirectResolver(RequestsResolver(timeout=timeout), config)
        return cls(resolver, workers=workers)

    # ------------------------------------------------------------------
    # Single buffer
    # ------------------------------------------------------------------

    def find_replacements(self, text: str) -> list[Replacement]:
        """Resolve every URL in text. Returns replacements sorted by start."""
        spans = find_all_urls(text)
        logger.debug("Found %d links", len(spans))
        if not spans:
            return []

        urls = [span.slice(text) for span in spans]
        # map() yields in submission order, whatever order the threads finish in
        resolved = list(self._executor().map(self.resolver.resolve, urls))

        return [
            Replacement(span.start, span.end, new)
            for span, new in zip(spans, resolved)
            if new is not None
        ]

    def fix(self, text: str) -> FixedText:
        """Fix all redirected links in text."""
        replacements = self.find_replacements(text)
        return FixedText(text=render(text, replacements), replacements=replacements)

    def fix_stream(self, reader: TextIO, writer: TextIO) -> int:
        """Read all of reader, write the fixed text to writer. Returns links fixed."""
        content = reader.read()
        replacements = self.find_replacements(content)
        replace_all(writer, content, replacements)
        return len(replacements)

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def fix_file(self, path: str | Path) -> int | None:
        """Fix links in a file in place.

        Returns the number of links fixed, or None when the file was
        skipped because it is not UTF-8 text.  The file is only rewritten
        when at least one link changed.
        """
        path = Path(path)
        logger.info("Fixing redirects in %s", path)
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise FileAccessError(path, "read", e) from e
        try:
            task = FileTask(path=path, content=raw.decode("utf-8"))
        except UnicodeDecodeError as e:
            logger.warning("Skipping %s: not UTF-8 text (%s)", path, e)
            return None

        # Resolve everything before opening the file for writing
        replacements = self.find_replacements(task.content)
        if not replacements:
            logger.info("No links to fix in %s", path)
            return 0

        try:
            with task.path.open("w", encoding="utf-8", newline="") as out:
                replace_all(out, task.content, replacements)
        except OSError as e:
            raise FileAccessError(path, "write", e) from e

        logger.info("Fixed %d links in %s", len(replacements), path)
        return len(replacements)

    def fix_all_files(self, paths: Iterable[str | Path]) -> int:
        """Fix every regular file under paths. Returns total links fixed.

        Stops at the first FileAccessError.  Non-UTF-8 files are skipped.
        """
        total = 0
        processed = 0
        skipped = 0
        for path in iter_files(paths):
            count = self.fix_file(path)
            if count is None:
                skipped += 1
                continue
            processed += 1
            total += count
        logger.info("Processed %d files (%d skipped), fixed %d links", processed, skipped, total)
        cached = self.resolver.cache.dump()
        logger.debug(
            "Resolution cache holds %d URLs, %d of them redirected",
            len(cached), sum(1 for new in cached.values() if new is not None),
        )
        return total


def _raise_list_error(e: OSError) -> None:
    raise FileAccessError(e.filename, "list", e) from e


def iter_files(paths: Iterable[str | Path]) -> Iterator[Path]:
    """Yield regular files given directly, and all regular files below directories."""
    for p in paths:
        root = Path(p)
        try:
            root.stat()
        except OSError as e:
            raise FileAccessError(root, "read", e) from e

        if root.is_file():
            yield root
            continue
        if not root.is_dir():
            continue

        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_list_error):
            dirnames.sort()
            for name in sorted(filenames):
                file = Path(dirpath) / name
                if file.is_file():
                    yield file
