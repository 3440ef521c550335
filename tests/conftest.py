"""Shared fixtures for typedconf tests."""

import os
from pathlib import Path
from typing import Callable

import pytest

# Keys the tests read or write; removed before each test so the ambient
# environment of the test runner cannot leak in.
TEST_KEYS = ("APP_NAME", "PORT", "DEBUG", "TIMEOUT", "HOSTS", "DB_HOST", "DB_PORT")


@pytest.fixture(autouse=True)
def isolated_environ(monkeypatch: pytest.MonkeyPatch):
    """Restore os.environ after each test, including keys set by loaders."""
    saved = dict(os.environ)
    for key in TEST_KEYS:
        monkeypatch.delenv(key, raising=False)
    for key in list(os.environ):
        if key.startswith("TC_"):
            monkeypatch.delenv(key)
    yield
    os.environ.clear()
    os.environ.update(saved)


@pytest.fixture
def write_env(tmp_path: Path) -> Callable[..., Path]:
    """Write an env file under tmp_path and return its path."""

    def _write(content: str, name: str = ".env") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
