"""NVD CVE API client.

Queries the NVD 2.0 keyword search for a package/version pair.  The
response body is treated as opaque bytes: a non-empty body is reported
as potential CVEs without any parsing.
"""

import logging
import sys
from typing import TextIO

import requests

from .config import ScanConfig

logger = logging.getLogger(__name__)


def build_query_url(package_name: str, version: str, config: ScanConfig) -> str:
    """Build the keyword-search URL for a package and version.

    Example::

        >>> build_query_url("express", "5.1.0", ScanConfig())
        'https://services.nvd.nist.gov/rest/json/cves/2.0?keywordSearch=express+5.1.0'
    """
    return f"{config.nvd_url}?keywordSearch={package_name}+{version}"


def query_cves(session: requests.Session, package_name: str, version: str, config: ScanConfig) -> bytes | None:
    """Search the NVD for CVEs mentioning ``package_name`` and ``version``.

    Args:
        session: Requests session.
        package_name: Package to search for.
        version: Resolved version of the package.
        config: Scanner configuration.

    Returns:
        The raw response body, or ``None`` if the request or read failed.
    """
    url = build_query_url(package_name, version, config)
    headers = {}
    api_key = config.api_key()
    if api_key:
        headers["apiKey"] = api_key

    logger.info("Querying NVD API for %s", package_name)
    logger.info("URL: %s", url)
    try:
        r = session.get(url, headers=headers, timeout=config.http_timeout)
        body = r.content
    except requests.RequestException as e:
        logger.error("Error querying NVD API for %s: %s", package_name, e)
        return None

    if r.status_code != 200:
        logger.warning("NVD API returned status %d for %s", r.status_code, package_name)
    return body


def report_findings(package_name: str, body: bytes, out: TextIO | None = None) -> bool:
    """Print the NVD result for a package.

    Returns:
        ``True`` if the body was non-empty and reported as potential CVEs.
    """
    out = out or sys.stdout
    if body:
        print(f"Found potential CVEs for {package_name}:", file=out)
        print(body.decode("utf-8", errors="replace"), file=out)
        return True
    print(f"No CVEs found for {package_name}", file=out)
    return False
