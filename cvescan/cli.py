"""Command-line entry point.

Usage::

    cvescan path/to/package.json
    cvescan package.json --config cvescan.yaml --no-runtime
"""

import argparse
import logging
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import Sequence

from . import __version__
from .config import ScanConfig, find_config, load_config
from .errors import ConfigError, ManifestError
from .logs import results_file, scan_log
from .scanner import run_scan

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="cvescan",
        description="Check a package.json's dependencies against the NVD CVE database",
    )
    p.add_argument("manifest", type=Path, help="Path to package.json")
    p.add_argument("--config", type=Path, default=None, help="Config file (default: ./cvescan.yaml if present)")
    p.add_argument("--log-file", type=Path, default=None, help="Append diagnostics to this file")
    p.add_argument("--results-file", type=Path, default=None, help="Results file to create/open")
    p.add_argument("--runtime", default=None, help="Runtime binary to probe (default: node)")
    p.add_argument("--no-runtime", action="store_true", help="Don't audit the local runtime version")
    p.add_argument("-v", "--verbose", action="store_true", help="Log full registry documents")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def _resolve_config(args: argparse.Namespace) -> ScanConfig:
    """Load the config file (explicit or discovered) and apply CLI overrides."""
    path = args.config or find_config()
    cfg = load_config(path) if path else ScanConfig()

    updates: dict = {}
    if args.log_file is not None:
        updates["log_file"] = args.log_file
    if args.results_file is not None:
        updates["results_file"] = args.results_file
    runtime_updates: dict = {}
    if args.runtime:
        runtime_updates["binary"] = args.runtime
    if args.no_runtime:
        runtime_updates["enabled"] = False
    if runtime_updates:
        updates["runtime"] = cfg.runtime.model_copy(update=runtime_updates)
    return cfg.model_copy(update=updates) if updates else cfg


def main(argv: Sequence[str] | None = None) -> int:
    """Run a scan.  Returns the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        cfg = _resolve_config(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    with ExitStack() as stack:
        stack.enter_context(scan_log(cfg.log_file, verbose=args.verbose))
        stack.enter_context(results_file(cfg.results_file))
        logger.info("cvescan %s scanning %s", __version__, args.manifest)
        try:
            run_scan(args.manifest, cfg)
        except ManifestError as e:
            logger.critical("%s", e)
            print(f"Error: {e}", file=sys.stderr)
            return 1
        logger.info("Scan of %s complete", args.manifest)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
