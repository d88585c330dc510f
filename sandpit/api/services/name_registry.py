# This file implements the name registry service that owns all access to the names table.
# It exists so routers can add and list names without embedding SQL directly.
# Names are listed in insertion order by ascending storage identifier and are never cached.
# Storage failures propagate unchanged as StorageError; this layer never retries.

from __future__ import annotations

from sandpit.api.api_config import ApiConfig
from sandpit.api.db_access import DatabaseClient, StorageError


class NameRegistry:
    """Append-only registry of names backed by a relational table."""

    def __init__(self, *, config: ApiConfig, db: DatabaseClient) -> None:
        self.config = config
        self.db = db
        self.names_table = self.config.names_table_name

    def add_name(self, name: str) -> None:
        if not isinstance(name, str):
            raise ValueError(f"name must be a string, got {type(name).__name__}")

        query = f"INSERT INTO {self.names_table} (name) VALUES (:name)"
        self.db.execute(query, {"name": name})

    def list_names(self) -> list[str]:
        query = f"SELECT name FROM {self.names_table} ORDER BY id ASC"
        rows = self.db.fetch_all(query)

        names: list[str] = []
        for row in rows:
            value = row.get("name")
            if value is None:
                raise StorageError(f"Malformed row in {self.names_table}: missing name value.")
            names.append(str(value))
        return names
