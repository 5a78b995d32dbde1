"""
RPM Utilities

Provides utilities for parsing and comparing RPM package versions.
Handles EVR ([EPOCH:]VERSION[-RELEASE]) strings as reported by
``rpm -q --queryformat '%{EPOCH}:%{VERSION}-%{RELEASE}'``.
"""

import re
from dataclasses import dataclass
from typing import Any, Tuple, Union

from packaging.version import InvalidVersion, Version

# rpm -q prints this when a package has no epoch
EPOCH_UNSET = "(none)"

_LEADING_INT = re.compile(r"\s*(\d+)")


def _leading_int(text: str) -> int:
    """Return the leading digits of text as an int, or 0 if there are none."""
    match = _LEADING_INT.match(text)
    if not match:
        return 0
    try:
        return int(match.group(1))
    except ValueError:
        # digit run past the interpreter's int conversion limit
        return 0


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def format_evr(epoch: int | str, version: str, release: str) -> str:
    """
    Format epoch-version-release string.

    Args:
        epoch: Package epoch
        version: Package version
        release: Package release

    Returns:
        Formatted EVR string
    """
    if isinstance(epoch, str):
        epoch = 0 if epoch == EPOCH_UNSET else _leading_int(epoch)

    if epoch > 0:
        return f"{epoch}:{version}-{release}"
    return f"{version}-{release}"


@dataclass(frozen=True)
class ParsedVersion:
    """
    Represents a parsed RPM EVR string.

    Attributes:
        epoch: Package epoch (default: 0)
        version: Structured Version, or the raw text if it is not one
        version_text: Raw version text
        release: Raw release string
        release_major: Leading integer of the release
        release_remainder: Rest of the release after the first dot
    """

    epoch: int
    version: Union[Version, str]
    version_text: str
    release: str
    release_major: int
    release_remainder: str

    @property
    def structured(self) -> bool:
        """Return True if the version parsed as a structured version."""
        return isinstance(self.version, Version)

    @property
    def evr(self) -> str:
        """Return EVR string."""
        return format_evr(self.epoch, self.version_text, self.release)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "epoch": self.epoch,
            "version": self.version_text,
            "structured": self.structured,
            "release": self.release,
            "release_major": self.release_major,
            "release_remainder": self.release_remainder,
            "evr": self.evr,
        }


def parse_release(release: str) -> Tuple[int, str]:
    """
    Split a release string into its leading number and the remainder.

    Examples:
        "6.el9" -> (6, "el9")
        "427.13.1.el9_4" -> (427, "13.1.el9_4")
        "el9" -> (0, "")
    """
    first, _, remainder = release.partition(".")
    return _leading_int(first), remainder


def parse_version(text: str) -> ParsedVersion:
    """
    Parse an EVR string into a ParsedVersion.

    Supported formats:
        epoch:version-release
        version-release (epoch defaults to 0)
        version (release defaults to "0")

    Only the first ':' and the first '-' are significant. Parsing never
    fails; versions that are not structured are kept as opaque strings.

    Args:
        text: Version string, e.g. "1:3.0.7-24.el9"

    Returns:
        ParsedVersion object
    """
    epoch_text, sep, verrel = text.partition(":")
    if not sep:
        epoch = 0
        verrel = text
    elif epoch_text == EPOCH_UNSET:
        epoch = 0
    else:
        epoch = _leading_int(epoch_text)

    version_text, sep, release = verrel.partition("-")
    if not sep:
        release = "0"

    version: Union[Version, str]
    try:
        version = Version(version_text)
    except (InvalidVersion, TypeError, ValueError):
        # Weird version strings are compared as plain text
        version = version_text

    release_major, release_remainder = parse_release(release)

    return ParsedVersion(
        epoch=epoch,
        version=version,
        version_text=version_text,
        release=release,
        release_major=release_major,
        release_remainder=release_remainder,
    )


def compare_parsed(
    a: ParsedVersion, b: ParsedVersion, compare_epoch: bool = False
) -> int:
    """
    Compare two parsed versions.

    Epoch only takes part when compare_epoch is set.

    Returns:
        -1 if a < b
         0 if a == b
         1 if a > b
    """
    if compare_epoch:
        epoch_cmp = _cmp(a.epoch, b.epoch)
        if epoch_cmp != 0:
            return epoch_cmp

    if a.structured and b.structured:
        version_cmp = _cmp(a.version, b.version)
    else:
        version_cmp = _cmp(a.version_text, b.version_text)
    if version_cmp != 0:
        return version_cmp

    release_cmp = _cmp(a.release_major, b.release_major)
    if release_cmp != 0:
        return release_cmp

    return _cmp(a.release_remainder, b.release_remainder)


def compare_versions(a: str, b: str, compare_epoch: bool = False) -> int:
    """
    Compare two EVR strings.

    Args:
        a: First version string
        b: Second version string
        compare_epoch: Whether epochs take part in the comparison

    Returns:
        -1 if a < b
         0 if a == b
         1 if a > b
    """
    return compare_parsed(parse_version(a), parse_version(b), compare_epoch)
