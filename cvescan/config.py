"""Configuration models using Pydantic.

Scanner settings live in an optional ``cvescan.yaml`` (or JSON) file next to
the project being audited.  Everything has a default, so running without a
config file scans against the public npm registry and NVD.
"""

import json
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from . import __version__
from .errors import ConfigError

NPM_REGISTRY_URL = "https://registry.npmjs.org"
NVD_CVE_API_URL = "https://services.nvd.nist.gov/rest/json/cves/2.0"

CONFIG_FILENAMES = ("cvescan.yaml", "cvescan.yml", "cvescan.json")


class RuntimeConfig(BaseModel):
    """Settings for the runtime version probe.

    Attributes:
        enabled: Probe the runtime and audit it as a synthetic dependency.
        binary: Executable to run (looked up on ``PATH``).
        version_flag: Argument that makes the binary print its version.
    """

    enabled: bool = True
    binary: str = "node"
    version_flag: str = "-v"


class ScanConfig(BaseModel):
    """Validated scanner configuration.

    Example YAML::

        registry_url: https://registry.npmjs.org
        nvd_url: https://services.nvd.nist.gov/rest/json/cves/2.0
        runtime:
          enabled: true
          binary: node
        log_file: cve_scan.log
        results_file: cve_scan_results.json
        http_read_timeout: 60
    """

    registry_url: str = NPM_REGISTRY_URL
    nvd_url: str = NVD_CVE_API_URL
    nvd_api_key: str | None = None
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)
    log_file: Path = Path("cve_scan.log")
    results_file: Path = Path("cve_scan_results.json")
    http_connect_timeout: float = Field(default=10.0, gt=0)
    http_read_timeout: float = Field(default=60.0, gt=0)
    user_agent: str = f"cvescan/{__version__}"

    @field_validator("registry_url", "nvd_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"not an http(s) URL: {v!r}")
        return v.rstrip("/")

    @property
    def http_timeout(self) -> tuple[float, float]:
        """``(connect, read)`` timeout tuple for ``requests``."""
        return (self.http_connect_timeout, self.http_read_timeout)

    def api_key(self) -> str | None:
        """Return the NVD API key, falling back to ``NVD_API_KEY`` from env."""
        return self.nvd_api_key or os.environ.get("NVD_API_KEY") or None


def load_config(path: Path) -> ScanConfig:
    """Load scanner settings from a YAML or JSON file.

    Args:
        path: Path to the config file.

    Returns:
        Validated ``ScanConfig`` instance.

    Raises:
        ConfigError: if the file can't be read, decoded or validated.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    try:
        if path.suffix.lower() == ".json":
            raw: Any = json.loads(content)
        else:
            raw = yaml.safe_load(content) or {}
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot parse config file {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    try:
        return ScanConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e


def find_config(directory: Path | None = None) -> Path | None:
    """Find a config file, preferring YAML over JSON.

    Args:
        directory: Where to look; defaults to the working directory.

    Returns:
        Path of the first existing config file, or ``None``.
    """
    base = directory or Path(".")
    for name in CONFIG_FILENAMES:
        candidate = base / name
        if candidate.is_file():
            return candidate
    return None
