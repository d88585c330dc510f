"""DDL helpers for the names table."""

from __future__ import annotations

_ID_COLUMN_BY_DIALECT: dict[str, str] = {
    "postgresql": "id BIGSERIAL PRIMARY KEY",
    "mysql": "id BIGINT NOT NULL AUTO_INCREMENT PRIMARY KEY",
    "mariadb": "id BIGINT NOT NULL AUTO_INCREMENT PRIMARY KEY",
    "sqlite": "id INTEGER PRIMARY KEY AUTOINCREMENT",
}


def names_table_ddl(*, dialect_name: str, table_name: str) -> str:
    """Return an idempotent CREATE TABLE statement for the given SQL dialect."""

    id_column = _ID_COLUMN_BY_DIALECT.get(dialect_name)
    if id_column is None:
        supported = ", ".join(sorted(_ID_COLUMN_BY_DIALECT))
        raise ValueError(f"Unsupported database dialect {dialect_name!r}; expected one of: {supported}")

    return f"""
    CREATE TABLE IF NOT EXISTS {table_name} (
        {id_column},
        name TEXT NOT NULL
    )
    """
