"""Shared pytest fixtures for compwire tests."""

from pathlib import Path

import pytest

from compwire.container import Container
from compwire.lock_mode import LockMode

SCAN_FIXTURES = Path(__file__).parent / "scan_fixtures"


@pytest.fixture()
def container() -> Container:
    """Unwired container with the default thread lock."""
    return Container()


@pytest.fixture()
def unlocked_container() -> Container:
    """Unwired container without cache locking."""
    return Container(lock_mode=LockMode.NONE)


@pytest.fixture()
def services_dir() -> Path:
    """Directory of component modules loaded by file location."""
    return SCAN_FIXTURES / "services"
