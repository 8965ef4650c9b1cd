"""cvescan — dependency CVE auditing for a single local project.

This package reads a ``package.json``-style manifest, resolves each
dependency's latest version from the npm registry, and searches the NVD
CVE API for matching advisories.
"""

__version__ = "0.1.0"
