"""Shared test fixtures and test-path bootstrap."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


from ensure_version.source import ReleaseCatalog, VersionSource  # noqa: E402


RUNNING_VERSIONS = {
    "python": "1.9.4",
    "implementation": "4.5.2",
    "sqlite": "9.9.115.7",
}


@pytest.fixture
def source() -> VersionSource:
    """Source with fixed versions and no release catalog."""
    return VersionSource(RUNNING_VERSIONS, primary="python")


@pytest.fixture
def catalog_source() -> VersionSource:
    """Source whose primary component has a static release catalog."""
    catalog = ReleaseCatalog.from_releases(["1.5.2", "1.8.0", "1.9.0", "1.9.3", "1.9.4"])
    return VersionSource(RUNNING_VERSIONS, primary="python", catalog=catalog)
