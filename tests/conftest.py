from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Generator, Iterator
from pathlib import Path

import pytest

# Register fixture plugins from tests/fixtures/
pytest_plugins = [
    "tests.fixtures.config",
    "tests.fixtures.models",
]


@pytest.fixture(autouse=True)
def configure_test_logging() -> Generator[None, None, None]:
    """Configure structlog for test environment.

    This fixture runs automatically for all tests so engine debug events
    stay quiet and log output never mixes with test stdout.
    """
    from bindery.logging import configure_logging

    configure_logging(level=logging.WARNING)
    yield


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for test files.

    Also saves and restores the current working directory to prevent
    tests that use os.chdir() from affecting other tests.
    """
    original_cwd = os.getcwd()
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
    os.chdir(original_cwd)


@pytest.fixture
def clean_env(
    monkeypatch: pytest.MonkeyPatch, temp_dir: Path
) -> Generator[None, None, None]:
    """Remove all BINDERY_ environment variables and hide the user config."""
    original_env = os.environ.copy()
    for key in list(os.environ.keys()):
        if key.startswith("BINDERY_"):
            del os.environ[key]
    monkeypatch.setattr(
        "bindery.config.get_user_config_path",
        lambda: temp_dir / "home" / ".config" / "bindery" / "config.yaml",
    )
    yield
    os.environ.clear()
    os.environ.update(original_env)
