"""YAML/dict config loader for fixred.

Supports loading from a YAML file or a plain dict (for embedding in a
larger config file).

Example YAML:

    fixred:
      extract: 'github\\.com/'     # only fix URLs matching this
      ignore: 'docs\\.github\\.com/' # never fix URLs matching this
      shallow: false               # true = follow one redirect hop only
      timeout: 10                  # seconds per HTTP request
      workers: 16                  # resolution threads per file
"""

from __future__ import annotations
from pathlib import Path
from typing import Any

from .errors import ConfigError
from .filters import FilterConfig
from .redirector import Redirector
from .resolve import DEFAULT_TIMEOUT


def load_config(data: dict[str, Any] | None) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    data = data or {}
    # Support nested under "fixred" key or flat
    if "fixred" in data:
        data = data["fixred"] or {}
    if not isinstance(data, dict):
        raise ConfigError(f"config must be a mapping, got {type(data).__name__}")

    try:
        timeout = float(data.get("timeout", DEFAULT_TIMEOUT))
        workers = data.get("workers")
        workers = int(workers) if workers is not None else None
    except (TypeError, ValueError) as e:
        raise ConfigError(f"invalid config value: {e}") from e
    if timeout <= 0:
        raise ConfigError(f"timeout must be positive, got {timeout:g}")
    if workers is not None and workers < 1:
        raise ConfigError(f"workers must be at least 1, got {workers}")

    return {
        "extract": data.get("extract"),
        "ignore": data.get("ignore"),
        "shallow": bool(data.get("shallow", False)),
        "timeout": timeout,
        "workers": workers,
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    import yaml

    try:
        with open(path, encoding="utf-8") as f:
            return load_config(yaml.safe_load(f))
    except OSError as e:
        raise ConfigError(f"could not read config {path}: {e.strerror or e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e


def create_redirector(config: dict[str, Any]) -> Redirector:
    """Create a fully configured redirector from a config dict."""
    cfg = load_config(config)
    filters = FilterConfig.from_patterns(
        cfg["extract"],
        cfg["ignore"],
        shallow=cfg["shallow"],
    )
    return Redirector.create(filters, timeout=cfg["timeout"], workers=cfg["workers"])
