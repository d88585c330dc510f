# This file builds a fully wired application against a real database for integration tests.
# It exists so the HTTP round trip runs through the production dependency factories, not overrides.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import pytest
from fastapi.testclient import TestClient

from sandpit.api import api_config, dependencies
from sandpit.api.app import create_app


def _clear_caches() -> None:
    api_config.get_api_config.cache_clear()
    dependencies.get_database_client.cache_clear()
    dependencies.get_name_registry.cache_clear()


@contextmanager
def wired_client(
    monkeypatch: pytest.MonkeyPatch,
    *,
    database_url: str,
    table_name: str = "test_sample",
) -> Iterator[TestClient]:
    """Yield a TestClient for a fresh app whose startup applies the names DDL."""

    monkeypatch.setenv("DATABASE_URL", database_url)
    monkeypatch.setenv("NAMES_TABLE_NAME", table_name)
    monkeypatch.setenv("API_CREATE_SCHEMA_ON_STARTUP", "true")
    _clear_caches()
    try:
        with TestClient(create_app()) as client:
            yield client
    finally:
        dependencies.get_database_client().dispose()
        _clear_caches()
