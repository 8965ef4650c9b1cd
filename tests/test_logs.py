"""Unit tests for cvescan.logs — scoped log and results files."""

import logging
from pathlib import Path

import pytest

from cvescan.logs import PACKAGE_LOGGER, results_file, scan_log


class TestScanLog:
    def test_writes_and_detaches(self, tmp_path: Path):
        path = tmp_path / "scan.log"
        with scan_log(path) as log:
            logging.getLogger("cvescan.registry").info("Package Name: %s", "express")
            assert any(isinstance(h, logging.FileHandler) for h in log.handlers)
        assert not any(isinstance(h, logging.FileHandler) for h in logging.getLogger(PACKAGE_LOGGER).handlers)
        text = path.read_text(encoding="utf-8")
        assert "[INFO] cvescan.registry: Package Name: express" in text

    def test_appends(self, tmp_path: Path):
        path = tmp_path / "scan.log"
        path.write_text("previous run\n", encoding="utf-8")
        with scan_log(path):
            logging.getLogger("cvescan.scanner").warning("second run")
        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "previous run"
        assert lines[-1].endswith("second run")

    def test_debug_only_when_verbose(self, tmp_path: Path):
        quiet = tmp_path / "quiet.log"
        with scan_log(quiet):
            logging.getLogger("cvescan.registry").debug("big document")
        loud = tmp_path / "loud.log"
        with scan_log(loud, verbose=True):
            logging.getLogger("cvescan.registry").debug("big document")
        assert "big document" not in quiet.read_text(encoding="utf-8")
        assert "big document" in loud.read_text(encoding="utf-8")

    def test_released_on_error(self, tmp_path: Path):
        path = tmp_path / "scan.log"
        with pytest.raises(RuntimeError):
            with scan_log(path):
                raise RuntimeError("scan blew up")
        assert logging.getLogger(PACKAGE_LOGGER).handlers == []

    def test_creates_parent_dirs(self, tmp_path: Path):
        path = tmp_path / "logs" / "nested" / "scan.log"
        with scan_log(path):
            pass
        assert path.exists()


class TestResultsFile:
    def test_created_if_absent(self, tmp_path: Path):
        path = tmp_path / "cve_scan_results.json"
        with results_file(path) as f:
            assert not f.closed
        assert f.closed
        assert path.exists()

    def test_existing_content_untouched(self, tmp_path: Path):
        path = tmp_path / "cve_scan_results.json"
        path.write_text('{"old": true}', encoding="utf-8")
        with results_file(path):
            pass
        assert path.read_text(encoding="utf-8") == '{"old": true}'
