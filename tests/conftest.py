"""Shared test fixtures.

Add fixtures here that are used across multiple test files.
"""

from pathlib import Path

import pytest

from grabver.versioning.config import VersioningConfig
from grabver.versioning.models import VersionRecord


@pytest.fixture
def sample_record() -> VersionRecord:
    """Record from a project that has released a few times."""
    return VersionRecord(major=1, minor=2, patch=5, build=10, code=3)


@pytest.fixture
def config() -> VersioningConfig:
    """Default versioning configuration."""
    return VersioningConfig()


@pytest.fixture
def version_file(tmp_path: Path) -> Path:
    """Path of a not yet existing version file inside tmp_path."""
    return tmp_path / "version.properties"
