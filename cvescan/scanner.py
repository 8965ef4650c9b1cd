"""Scan orchestration.

Runs the whole audit for one manifest: load dependencies, add the probed
runtime, then resolve and search each dependency in turn.  Everything is
sequential; a failure for one dependency never stops the others.
"""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, TextIO

import requests

from .config import ScanConfig
from .errors import ProbeUnavailable
from .manifest import Dependency, read_dependencies
from .nvd import query_cves, report_findings
from .probe import probe_runtime_version, with_runtime
from .registry import requests_session, resolve_version

logger = logging.getLogger(__name__)

Probe = Callable[[str, str], str]


@dataclass
class DependencyCheck:
    """Outcome of checking one dependency.

    Attributes:
        dependency: The dependency that was checked.
        resolved_version: Version chosen from the registry, ``""`` if none.
        lookup_attempted: Whether the NVD was queried.
        report: Raw NVD response body, ``None`` if not queried or the query failed.
    """

    dependency: Dependency
    resolved_version: str = ""
    lookup_attempted: bool = False
    report: bytes | None = None


def runtime_dependency_name(binary: str) -> str:
    """Name the synthetic runtime dependency after the binary (``/usr/bin/node`` → ``node``)."""
    return Path(binary).name


def collect_dependencies(
    manifest_path: Path,
    config: ScanConfig,
    probe: Probe = probe_runtime_version,
) -> list[Dependency]:
    """Read the manifest and append the runtime entry when the probe succeeds.

    Raises:
        ManifestNotFound, ManifestParseError: the manifest is unusable.
    """
    dependencies = read_dependencies(manifest_path)
    logger.info("Loaded %d dependencies from %s", len(dependencies), manifest_path)

    rt = config.runtime
    if not rt.enabled:
        return dependencies

    try:
        version = probe(rt.binary, rt.version_flag)
    except ProbeUnavailable as e:
        logger.warning("Error checking %s version: %s", rt.binary, e)
        return dependencies

    if not version:
        logger.warning("%s %s printed no version", rt.binary, rt.version_flag)
        return dependencies

    name = runtime_dependency_name(rt.binary)
    logger.info("Active %s version: %s", name, version)
    return with_runtime(dependencies, name, version)


def check_dependency(
    session: requests.Session,
    dependency: Dependency,
    config: ScanConfig,
    out: TextIO | None = None,
) -> DependencyCheck:
    """Resolve one dependency's version and search the NVD for it."""
    check = DependencyCheck(dependency=dependency)
    check.resolved_version = resolve_version(session, dependency.name, config)
    if not check.resolved_version:
        logger.info("Skipping CVE check for %s: version not found.", dependency.name)
        return check

    check.lookup_attempted = True
    check.report = query_cves(session, dependency.name, check.resolved_version, config)
    if check.report is not None:
        report_findings(dependency.name, check.report, out)
    return check


def run_scan(
    manifest_path: Path,
    config: ScanConfig,
    session: requests.Session | None = None,
    out: TextIO | None = None,
    probe: Probe = probe_runtime_version,
) -> list[DependencyCheck]:
    """Audit every dependency in ``manifest_path``.

    Args:
        manifest_path: ``package.json``-style manifest.
        config: Scanner configuration.
        session: Requests session; one is created and closed here if omitted.
        out: Stream for progress and findings (default ``sys.stdout``).
        probe: Runtime version probe, replaceable for tests.

    Returns:
        One ``DependencyCheck`` per dependency, in scan order.

    Raises:
        ManifestNotFound, ManifestParseError: before any network call.
    """
    out = out or sys.stdout
    dependencies = collect_dependencies(manifest_path, config, probe)

    own_session = session is None
    if session is None:
        session = requests_session(config)

    checks: list[DependencyCheck] = []
    try:
        for dep in dependencies:
            print(f"Checking for CVEs for {dep.name}...", file=out)
            checks.append(check_dependency(session, dep, config, out))
            print(f"Finished checking for CVEs for {dep.name}\n", file=out)
    finally:
        if own_session:
            session.close()
    return checks
