#!/usr/bin/env python3
"""cvescan — thin shim.

Lets the scanner run straight from a checkout::

    python cve_scan.py path/to/package.json

The real implementation lives in ``cvescan/``.
"""

from typing import Optional, Sequence

from cvescan.cli import main as _main


def main(argv: Optional[Sequence[str]] = None) -> int:
    return _main(argv)


if __name__ == "__main__":
    raise SystemExit(main())
