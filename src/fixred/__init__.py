"""fixred — replace redirected links in text with the URLs they redirect to."""

__version__ = "1.1.0"

from .cache import ResolutionCache
from .errors import ConfigError, FileAccessError, FixredError, ResolveError
from .filters import FilterConfig
from .redirector import Redirector, iter_files
from .replace import render, replace_all
from .resolve import RedirectResolver, RequestsResolver, Resolver
from .scanner import find_all_urls
from .types import FileTask, FixedText, Replacement, UrlSpan

__all__ = [
    "Redirector", "iter_files",
    "RedirectResolver", "RequestsResolver", "Resolver",
    "ResolutionCache",
    "FilterConfig",
    "find_all_urls",
    "replace_all", "render",
    "UrlSpan", "Replacement", "FileTask", "FixedText",
    "FixredError", "ConfigError", "FileAccessError", "ResolveError",
]
