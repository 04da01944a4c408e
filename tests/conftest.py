"""
Shared fixtures for localbase tests.
"""
from pathlib import Path

import pytest

import persist
from file_store import create
from localbase import LocalBase


@pytest.fixture
def store_dir(tmp_path: Path) -> Path:
    """A temporary directory to hold stores."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def store_path(store_dir: Path) -> Path:
    """Path of an existing, empty store."""
    path = store_dir / "items.json"
    create(path)
    return path


@pytest.fixture
def db(store_dir: Path) -> LocalBase:
    """A LocalBase rooted at the temporary data directory."""
    return LocalBase(store_dir)


@pytest.fixture
def short_lock_timeout(monkeypatch):
    """Make lock waits fail fast."""
    monkeypatch.setattr(persist, "LOCK_TIMEOUT", 0.05)

