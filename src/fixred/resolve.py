"""Redirect resolution. The only part of fixred that touches the network.

Two layers:
    Resolver          strategy: "given a URL, where does it redirect to?"
    RedirectResolver  policy: cache, eligibility filter, identity check,
                        fragment preservation.  Wraps any Resolver.

Usage:
    resolver = RedirectResolver(RequestsResolver(), FilterConfig())
    resolver.resolve("http://github.com/rhysd")   # "https://github.com/rhysd"
"""

from __future__ import annotations
import logging
import threading
from typing import Protocol
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .cache import ResolutionCache
from .errors import ResolveError
from .filters import FilterConfig

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class Resolver(Protocol):
    """Strategy returning the redirect target of a URL.

    Returns the final URL of the redirect chain (or only the first hop
    when ``config.shallow``), or None if the URL does not redirect.
    Raises ResolveError when the URL cannot be resolved.
    """

    def resolve(self, url: str, config: FilterConfig) -> str | None: ...


class RequestsResolver:
    """Production strategy: HEAD requests through a per-thread requests.Session."""

    def __init__(self, *, timeout: float = DEFAULT_TIMEOUT, retries: int = 2) -> None:
        self.timeout = timeout
        self.retries = retries
        self._local = threading.local()
        self._sessions: list[requests.Session] = []
        self._sessions_lock = threading.Lock()

    def _session(self) -> requests.Session:
        """Lazy-init one session per worker thread."""
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._create_session()
            self._local.session = session
            with self._sessions_lock:
                self._sessions.append(session)
        return session

    def close(self) -> None:
        """Close every session created so far."""
        with self._sessions_lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()

    def _create_session(self) -> requests.Session:
        from . import __version__

        session = requests.Session()
        retry_strategy = Retry(
            total=self.retries,
            backoff_factor=0.5,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["HEAD"],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.headers["User-Agent"] = f"fixred/{__version__}"
        return session

    def resolve(self, url: str, config: FilterConfig) -> str | None:
        session = self._session()
        logger.debug("Sending HEAD request to %s", url)
        try:
            if config.shallow:
                response = session.head(url, timeout=self.timeout, allow_redirects=False)
                target = session.get_redirect_target(response)
                # Location may be relative to the requested URL
                return urljoin(response.url, target) if target else None

            response = session.head(url, timeout=self.timeout, allow_redirects=True)
            if not response.history:
                return None
            return response.url
        except (requests.RequestException, ValueError) as e:
            raise ResolveError(url, e) from e


class RedirectResolver:
    """Resolves URLs through a shared ResolutionCache.

    Thread-safe: many worker threads may call resolve() concurrently.
    Two threads racing on the same uncached URL may both hit the
    network; the first result stored wins.
    """

    def __init__(
        self,
        resolver: Resolver,
        config: FilterConfig | None = None,
        cache: ResolutionCache | None = None,
    ) -> None:
        self.resolver = resolver
        self.config = config or FilterConfig()
        self.cache = cache if cache is not None else ResolutionCache()

    def close(self) -> None:
        close = getattr(self.resolver, "close", None)
        if close is not None:
            close()

    def resolve(self, url: str) -> str | None:
        """Return the replacement for url, or None to leave it as is."""
        hit, cached = self.cache.lookup(url)
        if hit:
            logger.debug("Cache hit: %s -> %s", url, cached)
            return cached

        if not self.config.is_eligible(url):
            logger.debug("Skipping %s (filtered out)", url)
            return self.cache.put(url, None)

        # Fragments are client-side only, redirects never carry them
        base, sep, fragment = url.partition("#")
        try:
            resolved = self.resolver.resolve(base, self.config)
        except ResolveError as e:
            logger.warning("%s", e)
            resolved = None

        if resolved is not None:
            if resolved == base:
                resolved = None
            elif sep and "#" not in resolved:
                resolved = f"{resolved}{sep}{fragment}"
        if resolved == url:
            resolved = None

        logger.debug("Resolved redirect: %s -> %s", url, resolved)
        return self.cache.put(url, resolved)
