"""
Pytest configuration and fixtures for rpm helper tests.
"""

import subprocess
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for tests."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config_file(temp_dir):
    """Write a helper config file and return its path."""
    path = temp_dir / "rpm-helpers.yaml"
    path.write_text("rpm_path: /opt/rpm/bin/rpm\nquery_timeout: 5\n")
    return path


@pytest.fixture
def fake_rpm(monkeypatch):
    """
    Replace subprocess.run with a fake rpm.

    Set ``fake_rpm.installed`` to a mapping of package name to the list of
    EVR lines rpm should print. Every invocation is recorded in
    ``fake_rpm.calls``.
    """

    class FakeRpm:
        def __init__(self):
            self.installed = {}
            self.calls = []

        def __call__(self, cmd, **kwargs):
            self.calls.append((cmd, kwargs))
            name = cmd[-1]
            if name not in self.installed:
                return subprocess.CompletedProcess(
                    cmd, 1, stdout=f"package {name} is not installed\n", stderr=""
                )
            stdout = "".join(f"{line}\n" for line in self.installed[name])
            return subprocess.CompletedProcess(cmd, 0, stdout=stdout, stderr="")

    fake = FakeRpm()
    monkeypatch.setattr(subprocess, "run", fake)
    return fake


@pytest.fixture
def rpm_version_pairs():
    """Provide pairs of EVR strings for comparison testing."""
    return [
        # (a, b, expected_result)
        ("1.0-1.el9", "1.0-2.el9", -1),  # release bump
        ("1.0-1.el9", "1.0-1.el9", 0),  # same version
        ("1.0-2.el9", "1.0-1.el9", 1),  # a is newer
        ("1.0-1.el9", "2.0-1.el9", -1),  # version bump
        ("5.1.8-6.el9", "5.2.0-1.el9", -1),  # version wins over release
        ("1.2.10-1", "1.2.9-1", 1),  # numeric, not lexical
        ("1.0-10", "1.0-9", 1),  # numeric release major
        ("1.0-1.el9", "1.0-1.el8", 1),  # lexical release remainder
        ("1.0-1", "1.0.0-1", 0),  # zero padded
        ("1.0", "1.0-0", 0),  # release defaults to "0"
        ("(none):1.0-1", "0:1.0-2", -1),
    ]
