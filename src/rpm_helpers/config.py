"""
Helper Configuration

Loads settings for the installed-package query from a YAML file.

Example:
    rpm_path: /usr/bin/rpm
    query_timeout: 30
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)


@dataclass
class HelperConfig:
    """
    Settings for querying the host package manager.

    Attributes:
        rpm_path: rpm executable (looked up on PATH if not absolute)
        query_timeout: Seconds to wait for a single rpm query
    """

    rpm_path: str = "rpm"
    query_timeout: float = 30.0

    def __post_init__(self) -> None:
        """Validate field types."""
        if not isinstance(self.rpm_path, str) or not self.rpm_path:
            raise ValueError(f"rpm_path must be a non-empty string: {self.rpm_path!r}")
        if isinstance(self.query_timeout, bool) or not isinstance(
            self.query_timeout, (int, float)
        ):
            raise ValueError(f"query_timeout must be a number: {self.query_timeout!r}")
        if self.query_timeout <= 0:
            raise ValueError(f"query_timeout must be positive: {self.query_timeout!r}")
        self.query_timeout = float(self.query_timeout)


def load_config(config_path: str | Path) -> HelperConfig:
    """
    Load and validate a helper configuration file.

    Args:
        config_path: Path to the YAML file

    Returns:
        HelperConfig populated from the file, defaults for missing keys

    Raises:
        FileNotFoundError: If the file does not exist
        yaml.YAMLError: If the file is not valid YAML
        ValueError: If the document has unknown keys or bad values
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.debug(f"Empty config file, using defaults: {config_path}")
        return HelperConfig()

    if not isinstance(data, dict):
        raise ValueError(f"Config must be a mapping: {config_path}")

    known = {f.name for f in fields(HelperConfig)}
    unknown = sorted(str(key) for key in data if key not in known)
    if unknown:
        raise ValueError(f"Unknown config keys in {config_path}: {', '.join(unknown)}")

    return HelperConfig(**data)
