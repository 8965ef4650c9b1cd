"""Exception types raised by cvescan.

``ManifestError`` and ``ConfigError`` are fatal to a scan.  Everything else
the scanner encounters (registry or NVD failures, a missing runtime) is
logged and the scan carries on.
"""


class ScanError(Exception):
    """Base class for all cvescan errors."""


class ConfigError(ScanError):
    """The configuration file could not be read or failed validation."""


class ManifestError(ScanError):
    """The dependency manifest could not be loaded."""

    def __init__(self, path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


class ManifestNotFound(ManifestError):
    """The manifest file does not exist or cannot be opened."""


class ManifestParseError(ManifestError):
    """The manifest is not valid JSON or lacks a ``dependencies`` mapping."""


class ProbeUnavailable(ScanError):
    """The runtime binary is missing or did not report a version."""
