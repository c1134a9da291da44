"""CLI interface for fixred.

Usage:
    # Fix links in files and directories (recursively), in place
    fixred README.md docs/

    # Filter: only github.com links, but not GitHub docs
    fixred -e 'github\\.com/' -r 'docs\\.github\\.com/' docs/

    # Follow only the first redirect hop
    fixred --shallow README.md

    # Filter stdin to stdout
    cat README.md | fixred > README.fixed.md

Set FIXRED_LOG=info to see which file is being processed, FIXRED_LOG=debug
to see every resolution.
"""

from __future__ import annotations
import argparse
import logging
import sys
from typing import Any

from . import __version__
from .config import create_redirector, load_config, load_from_yaml
from .errors import FixredError
from .log import setup_logging

logger = logging.getLogger(__name__)


def _build_config(args: argparse.Namespace) -> dict[str, Any]:
    """Config file first, command line flags on top."""
    cfg = load_from_yaml(args.config) if args.config else load_config({})
    if args.extract is not None:
        cfg["extract"] = args.extract
    if args.ignore is not None:
        cfg["ignore"] = args.ignore
    if args.shallow:
        cfg["shallow"] = True
    if args.timeout is not None:
        cfg["timeout"] = args.timeout
    if args.workers is not None:
        cfg["workers"] = args.workers
    return cfg


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fixred",
        description=(
            "Fix outdated links in text files. Every http:// and https:// URL "
            "is replaced with the URL it redirects to."
        ),
    )
    parser.add_argument("-s", "--shallow", action="store_true",
                        help="Follow only the first redirect hop")
    parser.add_argument("-e", "--extract", metavar="REGEX", default=None,
                        help="Fix only URLs matching this pattern")
    parser.add_argument("-r", "--ignore", metavar="REGEX", default=None,
                        help="Never fix URLs matching this pattern")
    parser.add_argument("--config", metavar="FILE", default=None,
                        help="YAML config file (flags override it)")
    parser.add_argument("--timeout", type=float, default=None,
                        help="Timeout in seconds per HTTP request")
    parser.add_argument("--workers", type=int, default=None,
                        help="Parallel resolution threads")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "paths", metavar="PATH", nargs="*",
        help="Files or directories to fix in place. Reads stdin and writes "
             "stdout when omitted.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    setup_logging()

    try:
        with create_redirector(_build_config(args)) as redirector:
            if args.paths:
                logger.info("Processing all files in %s", ", ".join(args.paths))
                count = redirector.fix_all_files(args.paths)
            else:
                logger.info("Fixing redirects in stdin")
                count = redirector.fix_stream(sys.stdin, sys.stdout)
    except FixredError as e:
        sys.stderr.write(f"fixred: {e}\n")
        return 1
    except UnicodeDecodeError as e:
        sys.stderr.write(f"fixred: could not read stdin: {e}\n")
        return 1
    except OSError as e:
        sys.stderr.write(f"fixred: I/O error: {e}\n")
        return 1

    sys.stderr.write(f"Fixed {count} link(s)\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
