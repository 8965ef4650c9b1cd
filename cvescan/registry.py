"""npm registry client.

Resolves the version of a package to audit.  All network I/O for the
registry is isolated here; failures are logged and reported as an empty
version so the caller can skip the package.
"""

import json
import logging
from typing import Any, Mapping

import requests

from .config import ScanConfig

logger = logging.getLogger(__name__)


def requests_session(config: ScanConfig) -> requests.Session:
    """Create a configured requests session shared by all scan calls.

    Credentials are not set here; the NVD key is added per request so it
    never reaches the registry.

    Returns:
        Configured ``requests.Session``.
    """
    s = requests.Session()
    s.headers.update(
        {
            "User-Agent": config.user_agent,
            "Accept": "application/json",
        }
    )
    return s


def package_url(package_name: str, config: ScanConfig) -> str:
    return f"{config.registry_url}/{package_name}"


def select_latest_version(versions: Mapping[str, Any]) -> str:
    """Pick the greatest version key by plain string comparison.

    This is not semver ordering: ``"2.9.0"`` beats ``"10.0.0"`` because
    ``"2" > "1"``.

    Args:
        versions: The registry's ``versions`` mapping (version → metadata).

    Returns:
        The selected version, or ``""`` if ``versions`` is empty.
    """
    latest = ""
    for v in versions:
        if latest == "" or v > latest:
            latest = v
    return latest


def fetch_package(session: requests.Session, package_name: str, config: ScanConfig) -> dict[str, Any] | None:
    """Fetch the registry document for a package.

    Returns:
        The decoded JSON object, or ``None`` if the request failed, the
        status wasn't 200 or the body wasn't a JSON object.
    """
    url = package_url(package_name, config)
    try:
        r = session.get(url, timeout=config.http_timeout)
    except requests.RequestException as e:
        logger.error("Error fetching npm package details for %s: %s", package_name, e)
        return None

    if r.status_code != 200:
        logger.error(
            "npm registry returned non-200 status code for %s: %d %s",
            package_name,
            r.status_code,
            r.reason,
        )
        return None

    try:
        data = r.json()
    except ValueError as e:
        logger.error("Error decoding npm JSON response for %s: %s", package_name, e)
        return None

    if not isinstance(data, dict):
        logger.error("npm registry returned a non-object document for %s", package_name)
        return None
    return data


def resolve_version(session: requests.Session, package_name: str, config: ScanConfig) -> str:
    """Resolve the version of ``package_name`` to audit.

    Returns:
        The selected version string, or ``""`` when it can't be determined.
    """
    data = fetch_package(session, package_name, config)
    if data is None:
        return ""

    versions = data.get("versions")
    if isinstance(versions, dict):
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("npm package data for %s:\n%s", package_name, json.dumps(data, indent=2))
        version = select_latest_version(versions)
        if version:
            logger.info("Package Name: %s", package_name)
            logger.info("Package Version: %s", version)
            return version

    logger.warning("Could not determine version for %s", package_name)
    return ""
