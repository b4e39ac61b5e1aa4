#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Location: ./licensescan/cli.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Command line interface for the license scanner.

Quick usage
-----------
Build a store cache from a checkout of SPDX license-list-data:
    $ licensescan cache load-spdx license-list-data/json/details --output licenses.json.gz

Identify one file, looking for embedded licenses too:
    $ licensescan id LICENSE --cache licenses.json.gz --optimize

Scan a whole tree, one JSON document per line:
    $ licensescan crawl src/ --cache licenses.json.gz

Options not given on the command line fall back to the LICENSESCAN_* environment
settings (see ``licensescan.config``).
"""

# Standard
import argparse
import logging
from pathlib import Path
import sys
from typing import Any, Dict, Iterator, List, Optional, Sequence

# Third-Party
import orjson
from pydantic import ValidationError

# First-Party
from licensescan.config import get_settings
from licensescan.errors import LicenseScanError
from licensescan.store import Store
from licensescan.strategy import ScanOptions, ScanStrategy
from licensescan.text import TextData

logger = logging.getLogger(__name__)

__all__: List[str] = ["main", "scan_file"]


def _build_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Returns:
        argparse.ArgumentParser: Parser with ``id``, ``crawl`` and ``cache`` sub-commands.

    Examples:
        >>> args = _build_parser().parse_args(["id", "LICENSE", "--optimize", "--threshold", "0.8"])
        >>> (args.command, args.path, args.optimize, args.threshold)
        ('id', 'LICENSE', True, 0.8)
    """
    parser = argparse.ArgumentParser(prog="licensescan", description="Identify license texts in files.")
    parser.add_argument("--log-level", "-l", default=None, choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level (default: LICENSESCAN_LOG_LEVEL or INFO)")
    sub = parser.add_subparsers(dest="command", required=True)

    scan_opts = argparse.ArgumentParser(add_help=False)
    scan_opts.add_argument("--cache", help="License store cache file (default: LICENSESCAN_STORE_CACHE)")
    scan_opts.add_argument("--threshold", type=float, default=None, help="Confidence threshold, 0.0 to 1.0")
    scan_opts.add_argument("--shallow-limit", type=float, default=None, help="Score above which deeper scanning is skipped")
    scan_opts.add_argument("--max-passes", type=int, default=None, help="Maximum embedded licenses to look for per file")
    scan_opts.add_argument("--optimize", action=argparse.BooleanOptionalAction, default=None, help="Look for multiple licenses inside each file (default: LICENSESCAN_OPTIMIZE)")

    p_id = sub.add_parser("id", parents=[scan_opts], help="Identify the license(s) in a single file")
    p_id.add_argument("path", help="File to scan")

    p_crawl = sub.add_parser("crawl", parents=[scan_opts], help="Identify licenses in every file under a directory")
    p_crawl.add_argument("path", help="Directory to scan")

    p_cache = sub.add_parser("cache", help="Manage license store caches")
    cache_sub = p_cache.add_subparsers(dest="cache_command", required=True)
    p_load = cache_sub.add_parser("load-spdx", help="Build a cache from SPDX license-list-data JSON details")
    p_load.add_argument("directory", help="Directory of SPDX license JSON files (json/details)")
    p_load.add_argument("--output", "-o", required=True, help="Cache file to write")
    p_load.add_argument("--include-texts", action="store_true", help="Keep normalized license texts in memory while building")

    return parser


def _load_store(cache: Optional[str]) -> Store:
    """Load the store from ``cache`` or the configured default.

    Args:
        cache: Cache path given on the command line.

    Returns:
        Store: The loaded store.

    Raises:
        LicenseScanError: If no cache is configured.
    """
    path = cache or get_settings().store_cache
    if not path:
        raise LicenseScanError("no license store configured; pass --cache or set LICENSESCAN_STORE_CACHE")
    return Store.from_cache(path)


def _build_strategy(store: Store, args: argparse.Namespace) -> ScanStrategy:
    """Combine command line overrides with environment settings.

    Args:
        store: Store to bind.
        args: Parsed arguments.

    Returns:
        ScanStrategy: The configured strategy.
    """
    cfg = get_settings()
    options = ScanOptions(
        confidence_threshold=cfg.confidence_threshold if args.threshold is None else args.threshold,
        shallow_limit=cfg.shallow_limit if args.shallow_limit is None else args.shallow_limit,
        optimize=cfg.optimize if args.optimize is None else args.optimize,
        max_passes=cfg.max_passes if args.max_passes is None else args.max_passes,
    )
    return ScanStrategy(store, options)


def scan_file(strategy: ScanStrategy, path: Path) -> Dict[str, Any]:
    """Scan one file and render the result.

    Args:
        strategy: Strategy to scan with.
        path: File to read as UTF-8 text.

    Returns:
        Dict[str, Any]: The scan result plus a ``path`` key.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not UTF-8 text.
    """
    text = TextData(path.read_text(encoding="utf-8"))
    return {"path": str(path), **strategy.scan(text).to_dict()}


def _iter_files(root: Path) -> Iterator[Path]:
    """Yield regular files under ``root`` in a stable order.

    Args:
        root: Directory to walk recursively.

    Yields:
        Path: Each regular file, sorted by path.
    """
    for path in sorted(root.rglob("*")):
        if path.is_file():
            yield path


def _write(record: Dict[str, Any]) -> None:
    """Print one record to stdout as a JSON line.

    Args:
        record: JSON-serializable record.
    """
    sys.stdout.write(orjson.dumps(record).decode() + "\n")


def _run_id(args: argparse.Namespace) -> int:
    """Handle ``licensescan id``.

    Args:
        args: Parsed arguments with ``path`` and the scan options.

    Returns:
        int: ``0`` on success, ``1`` if the file cannot be read.
    """
    strategy = _build_strategy(_load_store(args.cache), args)
    try:
        record = scan_file(strategy, Path(args.path))
    except (OSError, UnicodeDecodeError) as e:
        print(f"Cannot read {args.path}: {e}", file=sys.stderr)
        return 1
    _write(record)
    return 0


def _run_crawl(args: argparse.Namespace) -> int:
    """Handle ``licensescan crawl``.

    Unreadable or non-UTF-8 files produce an ``error`` record instead of
    stopping the crawl.

    Args:
        args: Parsed arguments with ``path`` and the scan options.

    Returns:
        int: ``0`` on success, ``1`` if ``path`` is not a directory.
    """
    root = Path(args.path)
    if not root.is_dir():
        print(f"Not a directory: {root}", file=sys.stderr)
        return 1
    strategy = _build_strategy(_load_store(args.cache), args)
    for path in _iter_files(root):
        try:
            record = scan_file(strategy, path)
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Skipping {path}: {e}")
            record = {"path": str(path), "error": str(e)}
        _write(record)
    return 0


def _run_cache(args: argparse.Namespace) -> int:
    """Handle ``licensescan cache load-spdx``.

    Args:
        args: Parsed arguments with ``directory``, ``output`` and ``include_texts``.

    Returns:
        int: ``0`` once the cache is written.

    Raises:
        StoreLoadError: If the SPDX directory cannot be loaded.
    """
    store = Store.load_spdx(args.directory, include_texts=args.include_texts)
    store.to_cache(args.output)
    print(f"Wrote {len(store)} licenses to {args.output}", file=sys.stderr)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the CLI.

    Args:
        argv: Arguments, defaulting to ``sys.argv[1:]``.

    Returns:
        int: Process exit code (``0`` success, ``1`` on scanner or input errors).
    """
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level or get_settings().log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    handlers = {"id": _run_id, "crawl": _run_crawl, "cache": _run_cache}
    try:
        return handlers[args.command](args)
    except LicenseScanError as e:
        logger.debug("Scan failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValidationError as e:
        print(f"Invalid scan options: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
