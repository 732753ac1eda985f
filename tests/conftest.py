"""Pytest configuration and fixtures for lock-diff tests."""

from pathlib import Path
from typing import Callable

import pytest

from lock_diff.models import PackageRecord

REGISTRY = "registry+https://github.com/rust-lang/crates.io-index"


@pytest.fixture
def fixtures_dir() -> Path:
    """Get path to the sample lock files."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def old_lock_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "old.lock"


@pytest.fixture
def new_lock_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "new.lock"


@pytest.fixture
def broken_lock_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "broken.lock"


@pytest.fixture
def make_record() -> Callable[..., PackageRecord]:
    """Factory for registry packages with a checksum derived from the key."""
    def _make(name, version, source=REGISTRY, checksum=None, dependencies=()):
        if checksum is None:
            checksum = f"{name}-{version}-sum"
        return PackageRecord(name, version, source, checksum, tuple(dependencies))

    return _make
