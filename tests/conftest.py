"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv
load_dotenv()

from library.db.database import Database


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")


@pytest.fixture
def db(tmp_path):
    """A freshly initialised database in a per-test directory."""
    database = Database(path=tmp_path / "library.db")
    database.init()
    yield database
    database.close()
