# This file provides shared helpers for API endpoint tests.
# It exists so tests can override service dependencies without touching real databases.
# The helpers build consistent config objects and scoped TestClient contexts.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi.testclient import TestClient

from sandpit.api.api_config import ApiConfig
from sandpit.api.app import app
from sandpit.api.db_access import StorageError
from sandpit.api.dependencies import get_config, get_database_client, get_name_registry


def build_test_config(*, database_url: str = "sqlite+pysqlite:///:memory:") -> ApiConfig:
    """Create deterministic API config for tests."""

    return ApiConfig(
        api_name="Test Sandpit API",
        host="0.0.0.0",
        port=8080,
        environment="test",
        log_level="INFO",
        database_url=database_url,
        names_table_name="test_sample",
        names_path="/names",
        legacy_names_path="/sandpit",
        create_schema_on_startup=False,
        allowed_origins=[],
        app_version="0.1.0",
    )


class FakeDBClient:
    """Simple fake DB dependency for health/readiness endpoint tests."""

    def __init__(self, *, connected: bool = True, existing_tables: set[str] | None = None) -> None:
        self._connected = connected
        self._tables = {"test_sample"} if existing_tables is None else existing_tables

    def can_connect(self) -> bool:
        return self._connected

    def table_exists(self, table_name: str) -> bool:
        return self._connected and table_name in self._tables


class FakeNameRegistry:
    """In-memory stand-in for NameRegistry that records calls."""

    def __init__(self, names: list[str] | None = None, *, fail: bool = False) -> None:
        self.names = list(names or [])
        self.added: list[str] = []
        self.fail = fail

    def add_name(self, name: str) -> None:
        if self.fail:
            raise StorageError("store unreachable")
        self.added.append(name)
        self.names.append(name)

    def list_names(self) -> list[str]:
        if self.fail:
            raise StorageError("store unreachable")
        return list(self.names)


@contextmanager
def api_test_client(
    *,
    config: ApiConfig | None = None,
    db_client: Any | None = None,
    name_registry: Any | None = None,
) -> Iterator[TestClient]:
    """Yield a TestClient with scoped dependency overrides."""

    resolved_config = config or build_test_config()

    app.dependency_overrides[get_config] = lambda: resolved_config
    if db_client is not None:
        app.dependency_overrides[get_database_client] = lambda: db_client
    if name_registry is not None:
        app.dependency_overrides[get_name_registry] = lambda: name_registry

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
