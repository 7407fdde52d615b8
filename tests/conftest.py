"""
Shared pytest fixtures for relay tests.

- Every test gets a fresh service container and bootstrap state
- RELAY_* environment variables are cleared so host config cannot leak in
- The rotating log file is redirected into the test's tmp_path
"""

import os
from pathlib import Path

import pytest

from relay.core.bootstrap import reset
from relay.services.logging import RelayLogger


@pytest.fixture(autouse=True)
def clean_container():
    """Reset the DI container and bootstrap flag around each test."""
    reset()
    yield
    reset()


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Keep tests independent of the developer's relay config and log file."""
    for name in list(os.environ):
        if name.startswith("RELAY_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(RelayLogger, "LOG_FILE_PATH", tmp_path / ".relay-home" / "relay.log")
