"""
Installed Package Query

Asks rpm for the installed version of a package and answers whether a
package is installed at (or above) a given version.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable
from functools import cmp_to_key

from .config import HelperConfig
from .rpm_utils import compare_versions

logger = logging.getLogger(__name__)

QUERY_FORMAT = "%{EPOCH}:%{VERSION}-%{RELEASE}\\n"


class RpmQuery:
    """
    Queries the rpm database for installed package versions.

    Each call runs rpm once; nothing is cached.
    """

    def __init__(self, rpm_path: str = "rpm", timeout: float = 30.0):
        """
        Initialize the query.

        Args:
            rpm_path: rpm executable
            timeout: Seconds to wait for rpm before giving up
        """
        self.rpm_path = rpm_path
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: HelperConfig) -> RpmQuery:
        """Build a query from loaded settings."""
        return cls(rpm_path=config.rpm_path, timeout=config.query_timeout)

    def run(self, name: str) -> list[str]:
        """
        Run rpm -q for a package.

        Args:
            name: Package name

        Returns:
            One EVR string per installed instance, empty if the package is
            not installed or rpm could not be run
        """
        cmd = [self.rpm_path, "-q", "--queryformat", QUERY_FORMAT, "--", name]
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            completed = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"rpm query for {name} timed out after {self.timeout}s")
            return []
        except OSError as e:
            logger.warning(f"Unable to run {self.rpm_path}: {e}")
            return []

        if completed.returncode != 0:
            logger.debug(
                f"rpm query for {name} exited {completed.returncode}: "
                f"{completed.stdout.strip() or completed.stderr.strip()}"
            )
            return []

        return [line.strip() for line in completed.stdout.splitlines() if line.strip()]

    def installed_version(self, name: str) -> str | None:
        """
        Return the installed EVR of a package.

        When several instances are installed (multilib, kernels) the newest
        one is returned.

        Args:
            name: Package name

        Returns:
            EVR string, or None if the package is not installed
        """
        versions = self.run(name)
        if not versions:
            return None
        return max(
            versions,
            key=cmp_to_key(lambda a, b: compare_versions(a, b, compare_epoch=True)),
        )


def is_installed(
    name: str,
    version: str | None = None,
    compare_epoch: bool = False,
    exact: bool = True,
    query: Callable[[str], str | list[str] | None] | None = None,
) -> bool:
    """
    Check whether a package is installed, optionally at a given version.

    When several instances are installed (multilib, kernels) the package
    matches if any one of them satisfies the version.

    Args:
        name: Package name
        version: Target EVR; any installed version matches if omitted
        compare_epoch: Whether epochs take part in the comparison
        exact: Require an equal version instead of at least the target
        query: Returns the installed EVR (or a list of EVRs, one per
            instance) for a name, or None (default: RpmQuery().run)

    Returns:
        True if the package is installed and satisfies the version
    """
    if query is None:
        query = RpmQuery().run

    installed = query(name)
    if installed is None:
        return False
    if isinstance(installed, str):
        installed = [installed]
    if not installed:
        return False
    if version is None:
        return True

    for evr in installed:
        cmp = compare_versions(evr, version, compare_epoch)
        logger.debug(f"{name}: installed {evr}, wanted {version}, cmp={cmp}")
        if cmp == 0 or (not exact and cmp > 0):
            return True
    return False
