# This file wraps database access so API services can run parameterized SQL safely.
# It exists to keep SQL execution details out of router code and make testing easier.
# Every SQLAlchemy failure is translated into StorageError so callers see one storage failure kind.
# Keeping this layer small makes query behavior easier to audit and troubleshoot.

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from prometheus_client import Counter
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from sandpit.api.ddl import names_table_ddl

LOGGER = logging.getLogger("sandpit.storage")

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

STORAGE_ERRORS_TOTAL = Counter(
    "sandpit_storage_errors_total",
    "Total number of failed storage operations.",
    ["operation"],
)


class StorageError(RuntimeError):
    """The relational store could not complete a read or write."""


class DatabaseClient:
    """Minimal SQLAlchemy wrapper for API read/write access."""

    def __init__(self, *, database_url: str) -> None:
        try:
            self._engine: Engine = create_engine(database_url, pool_pre_ping=True, future=True)
        except SQLAlchemyError as exc:
            raise StorageError(f"Cannot create database engine: {exc}") from exc

    @property
    def dialect_name(self) -> str:
        return self._engine.dialect.name

    def can_connect(self) -> bool:
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            return False

    def table_exists(self, table_name: str) -> bool:
        self._validate_identifier(table_name)
        with self._storage_errors("table_exists"):
            return bool(inspect(self._engine).has_table(table_name))

    def fetch_all(self, query: str, params: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        with self._storage_errors("fetch_all"):
            with self._engine.connect() as connection:
                rows = connection.execute(text(query), dict(params or {})).mappings().all()
        return [dict(row) for row in rows]

    def execute(self, query: str, params: Mapping[str, Any] | None = None) -> None:
        with self._storage_errors("execute"):
            with self._engine.begin() as connection:
                connection.execute(text(query), dict(params or {}))

    def ensure_names_table(self, table_name: str) -> None:
        """Create the names table when it is missing."""

        safe_table = self._validate_identifier(table_name)
        ddl = names_table_ddl(dialect_name=self.dialect_name, table_name=safe_table)
        with self._storage_errors("ensure_names_table"):
            with self._engine.begin() as connection:
                connection.exec_driver_sql(ddl)

    def dispose(self) -> None:
        self._engine.dispose()

    @contextmanager
    def _storage_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            STORAGE_ERRORS_TOTAL.labels(operation=operation).inc()
            LOGGER.warning("storage operation failed operation=%s error=%s", operation, exc.__class__.__name__)
            raise StorageError(f"Storage operation {operation!r} failed.") from exc

    def _validate_identifier(self, identifier: str) -> str:
        if not _IDENTIFIER_RE.match(identifier):
            raise ValueError(f"Unsafe SQL identifier: {identifier!r}")
        return identifier
