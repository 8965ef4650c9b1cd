"""Runtime version probe.

The project's runtime (Node.js by default) is audited alongside its
declared packages.  Its version comes from running the local binary.
"""

import logging
import subprocess

from .errors import ProbeUnavailable
from .manifest import Dependency

logger = logging.getLogger(__name__)

PROBE_TIMEOUT = 15


def probe_runtime_version(binary: str = "node", flag: str = "-v") -> str:
    """Run ``<binary> <flag>`` and return its trimmed standard output.

    Raises:
        ProbeUnavailable: if the binary is missing, can't be executed,
            times out or exits non-zero.
    """
    try:
        result = subprocess.run(
            [binary, flag],
            capture_output=True,
            text=True,
            timeout=PROBE_TIMEOUT,
            check=True,
        )
    except FileNotFoundError as e:
        raise ProbeUnavailable(f"{binary} not found on PATH") from e
    except subprocess.CalledProcessError as e:
        raise ProbeUnavailable(f"{binary} {flag} exited with status {e.returncode}") from e
    except (subprocess.TimeoutExpired, OSError) as e:
        raise ProbeUnavailable(f"{binary} {flag} failed: {e}") from e
    return result.stdout.strip()


def with_runtime(dependencies: list[Dependency], name: str, version: str) -> list[Dependency]:
    """Return ``dependencies`` with the runtime appended as a synthetic entry.

    A declared dependency with the same name is replaced.  An empty
    ``version`` leaves the list unchanged.
    """
    if not version:
        return list(dependencies)
    out = [d for d in dependencies if d.name != name]
    out.append(Dependency(name=name, declared_version_range=version))
    return out
