"""
Shared test configuration.
It pins the environment the API reads at import time and provides disposable SQLite databases.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# The app module builds its FastAPI instance at import time, so these must be set before collection.
TEST_ENV = {
    "API_NAME": "Test Sandpit API",
    "ENV": "test",
    "API_HOST": "0.0.0.0",
    "API_PORT": "8080",
    "LOG_LEVEL": "INFO",
    "DATABASE_URL": "sqlite+pysqlite:///:memory:",
    "NAMES_TABLE_NAME": "test_sample",
    "NAMES_PATH": "/names",
    "NAMES_LEGACY_PATH": "/sandpit",
    "API_CREATE_SCHEMA_ON_STARTUP": "true",
    "API_ALLOWED_ORIGINS": "",
    "APP_VERSION": "0.1.0",
}
os.environ.update(TEST_ENV)

from sandpit.api.db_access import DatabaseClient  # noqa: E402


@pytest.fixture(autouse=True)
def base_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Restore the pinned environment for every test."""

    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)


@pytest.fixture
def sqlite_url(tmp_path: Path) -> str:
    """URL of a throwaway SQLite file database."""

    return f"sqlite+pysqlite:///{tmp_path / 'names.db'}"


@pytest.fixture
def sqlite_db(sqlite_url: str) -> Iterator[DatabaseClient]:
    """DatabaseClient bound to a fresh SQLite file with the names table applied."""

    client = DatabaseClient(database_url=sqlite_url)
    client.ensure_names_table("test_sample")
    try:
        yield client
    finally:
        client.dispose()
