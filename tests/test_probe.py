"""Unit tests for cvescan.probe — runtime version probe."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from cvescan.errors import ProbeUnavailable
from cvescan.manifest import Dependency
from cvescan.probe import probe_runtime_version, with_runtime

# ── probe_runtime_version ───────────────────────────────────────────────────


class TestProbeRuntimeVersion:
    @patch("cvescan.probe.subprocess.run")
    def test_strips_output(self, mock_run):
        mock_run.return_value = MagicMock(stdout="v20.11.1\n", returncode=0)
        assert probe_runtime_version() == "v20.11.1"
        args, kwargs = mock_run.call_args
        assert args[0] == ["node", "-v"]
        assert kwargs["check"] is True

    @patch("cvescan.probe.subprocess.run")
    def test_custom_binary(self, mock_run):
        mock_run.return_value = MagicMock(stdout="  deno 1.40.0  ", returncode=0)
        assert probe_runtime_version("deno", "--version") == "deno 1.40.0"
        assert mock_run.call_args[0][0] == ["deno", "--version"]

    @patch("cvescan.probe.subprocess.run", side_effect=FileNotFoundError("node"))
    def test_binary_missing(self, _):
        with pytest.raises(ProbeUnavailable, match="not found"):
            probe_runtime_version()

    @patch(
        "cvescan.probe.subprocess.run",
        side_effect=subprocess.CalledProcessError(3, ["node", "-v"]),
    )
    def test_non_zero_exit(self, _):
        with pytest.raises(ProbeUnavailable, match="status 3"):
            probe_runtime_version()

    @patch(
        "cvescan.probe.subprocess.run",
        side_effect=subprocess.TimeoutExpired(["node", "-v"], 15),
    )
    def test_timeout(self, _):
        with pytest.raises(ProbeUnavailable):
            probe_runtime_version()

    def test_real_missing_binary(self):
        with pytest.raises(ProbeUnavailable):
            probe_runtime_version("cvescan-definitely-not-a-binary")


# ── with_runtime ─────────────────────────────────────────────────────────────


class TestWithRuntime:
    def test_appends(self):
        deps = [Dependency("express", "^4.0.0")]
        out = with_runtime(deps, "node", "v20.0.0")
        assert out == [Dependency("express", "^4.0.0"), Dependency("node", "v20.0.0")]
        assert deps == [Dependency("express", "^4.0.0")]

    def test_replaces_declared_entry(self):
        deps = [Dependency("node", ">=18"), Dependency("express", "^4.0.0")]
        out = with_runtime(deps, "node", "v20.0.0")
        assert [d.name for d in out] == ["express", "node"]
        assert out[-1].declared_version_range == "v20.0.0"

    def test_empty_version_is_ignored(self):
        deps = [Dependency("express", "^4.0.0")]
        assert with_runtime(deps, "node", "") == deps
