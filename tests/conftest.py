"""Shared pytest configuration and fixtures for tests."""

import sys
import io
from pathlib import Path

import pytest

# Fix Windows console encoding
if sys.platform == "win32":
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from marc.core.config import Config  # noqa: E402


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the user's environment out of the tests."""
    monkeypatch.delenv("MARC_FILE", raising=False)
    monkeypatch.delenv("MARC_LOG_LEVEL", raising=False)


@pytest.fixture
def store_path(tmp_path):
    """Store file inside a fresh temporary directory (not created yet)."""
    return tmp_path / "marc" / "todos.json"


@pytest.fixture
def config(store_path):
    """Config pointing at the temporary store."""
    return Config(store_path=store_path)
