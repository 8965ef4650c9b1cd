"""Scoped log and results file handles for a scan run."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

PACKAGE_LOGGER = "cvescan"


@contextmanager
def scan_log(path: Path, verbose: bool = False) -> Iterator[logging.Logger]:
    """Route the package's log records to ``path`` for the duration of a run.

    The file is opened in append mode and created if absent.  The handler is
    detached and closed on exit, including when the scan raises.

    Args:
        path: Log file to append to.
        verbose: Also record DEBUG messages (full registry documents).

    Yields:
        The ``cvescan`` package logger.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    log = logging.getLogger(PACKAGE_LOGGER)
    previous_level = log.level
    log.setLevel(logging.DEBUG if verbose else logging.INFO)
    log.addHandler(handler)
    try:
        yield log
    finally:
        log.removeHandler(handler)
        log.setLevel(previous_level)
        handler.close()


@contextmanager
def results_file(path: Path) -> Iterator[IO[str]]:
    """Open the results file read/write/append, creating it if absent."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a+", encoding="utf-8") as f:
        yield f
