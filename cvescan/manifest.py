"""Dependency manifest loading.

Reads a ``package.json``-style file and returns the declared dependencies.
Only the ``dependencies`` mapping is used; any other top-level keys are
ignored and the declared version ranges are carried along untouched.
"""

import json
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import ManifestNotFound, ManifestParseError


@dataclass(frozen=True)
class Dependency:
    """A package to audit.

    Attributes:
        name: Package name as published on the registry.
        declared_version_range: Range string from the manifest (e.g. ``^4.17.1``).
            Kept for display only; the scanner always audits the registry's
            latest version.
    """

    name: str
    declared_version_range: str = ""


class Manifest(BaseModel):
    """The subset of ``package.json`` the scanner understands."""

    model_config = ConfigDict(extra="ignore")

    dependencies: dict[str, str]

    def to_dependencies(self) -> list[Dependency]:
        return [Dependency(name, rng) for name, rng in self.dependencies.items()]


def load_manifest(path: Path) -> Manifest:
    """Load and validate a manifest file.

    Args:
        path: Path to the manifest (usually ``package.json``).

    Returns:
        Validated ``Manifest``.

    Raises:
        ManifestNotFound: if the file can't be opened.
        ManifestParseError: if the content isn't a JSON object with a
            ``dependencies`` mapping of strings.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ManifestNotFound(path, f"cannot read manifest ({e})") from e
    except UnicodeDecodeError as e:
        raise ManifestParseError(path, f"not UTF-8 text ({e})") from e

    try:
        raw = json.loads(content)
    except json.JSONDecodeError as e:
        raise ManifestParseError(path, f"invalid JSON ({e})") from e

    if not isinstance(raw, dict):
        raise ManifestParseError(path, "manifest must be a JSON object")
    if "dependencies" not in raw:
        raise ManifestParseError(path, "missing 'dependencies'")

    try:
        return Manifest.model_validate(raw)
    except ValidationError as e:
        raise ManifestParseError(path, f"malformed 'dependencies' ({e.error_count()} errors)") from e


def read_dependencies(path: Path) -> list[Dependency]:
    """Shortcut for ``load_manifest(path).to_dependencies()``."""
    return load_manifest(path).to_dependencies()
