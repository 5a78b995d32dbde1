"""
RPM Helpers

Provides parsing and ordering of RPM-style [EPOCH:]VERSION[-RELEASE]
strings, and checks for whether a package is installed at a given version.
"""

from .config import HelperConfig, load_config
from .query import RpmQuery, is_installed
from .rpm_utils import (
    ParsedVersion,
    compare_parsed,
    compare_versions,
    format_evr,
    parse_release,
    parse_version,
)

__all__ = [
    "HelperConfig",
    "ParsedVersion",
    "RpmQuery",
    "compare_parsed",
    "compare_versions",
    "format_evr",
    "is_installed",
    "load_config",
    "parse_release",
    "parse_version",
]

__version__ = "1.0.0"
