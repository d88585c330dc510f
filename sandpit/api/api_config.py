# This file defines runtime settings for the name registry API in one place.
# It exists so route prefixes, the backing table, and startup behavior can be configured without code edits.
# The config loader reads environment variables and applies safe defaults for local development.
# It also validates the table name and route prefixes to prevent unsafe SQL identifiers and broken routes.

from __future__ import annotations

import os
import re
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


class ApiConfig(BaseModel):
    """Typed API runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    api_name: str = "Sandpit Name Registry"
    host: str = "0.0.0.0"
    port: int = 8080
    environment: str = "local"
    log_level: str = "INFO"
    database_url: str
    names_table_name: str = "test_sample"
    names_path: str = "/names"
    legacy_names_path: str = "/sandpit"
    create_schema_on_startup: bool = True
    allowed_origins: list[str] = Field(default_factory=list)
    app_version: str = "0.1.0"

    @field_validator("names_table_name")
    @classmethod
    def validate_identifier(cls, value: str) -> str:
        if not _IDENTIFIER_RE.match(value):
            raise ValueError(f"Unsafe SQL identifier: {value!r}")
        return value

    @field_validator("names_path")
    @classmethod
    def validate_names_path(cls, value: str) -> str:
        cleaned = value.rstrip("/")
        if not cleaned.startswith("/"):
            raise ValueError("names_path must start with '/' and name at least one segment.")
        return cleaned

    @field_validator("legacy_names_path")
    @classmethod
    def validate_legacy_names_path(cls, value: str) -> str:
        cleaned = value.strip().rstrip("/")
        if cleaned and not cleaned.startswith("/"):
            raise ValueError("legacy_names_path must be empty or start with '/'.")
        return cleaned

    @field_validator("port")
    @classmethod
    def validate_port(cls, value: int) -> int:
        if not 0 < value < 65536:
            raise ValueError("port must be between 1 and 65535.")
        return value

    def route_prefixes(self) -> list[str]:
        """Primary names prefix followed by the legacy alias, when enabled."""

        prefixes = [self.names_path]
        if self.legacy_names_path and self.legacy_names_path != self.names_path:
            prefixes.append(self.legacy_names_path)
        return prefixes


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "y", "on"}:
        return True
    if value in {"0", "false", "no", "n", "off"}:
        return False
    raise ValueError(f"{name} must be boolean-like, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_list(name: str, default: list[str] | None = None) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default or [])
    return [item.strip() for item in raw.split(",") if item.strip()]


def load_api_config(*, load_env: bool = True) -> ApiConfig:
    """Load API configuration from `.env` and process environment."""

    if load_env:
        load_dotenv()

    config_values: dict[str, object] = {
        "api_name": os.getenv("API_NAME", "Sandpit Name Registry"),
        "host": os.getenv("API_HOST", "0.0.0.0"),
        "port": _env_int("API_PORT", 8080),
        "environment": os.getenv("ENV", "local"),
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
        "database_url": os.getenv("DATABASE_URL", "").strip(),
        "names_table_name": os.getenv("NAMES_TABLE_NAME", "test_sample"),
        "names_path": os.getenv("NAMES_PATH", "/names"),
        "legacy_names_path": os.getenv("NAMES_LEGACY_PATH", "/sandpit"),
        "create_schema_on_startup": _env_bool("API_CREATE_SCHEMA_ON_STARTUP", True),
        "allowed_origins": _env_list("API_ALLOWED_ORIGINS", []),
        "app_version": os.getenv("APP_VERSION", "0.1.0"),
    }
    if not config_values["database_url"]:
        raise RuntimeError("DATABASE_URL is required for API startup.")

    return ApiConfig.model_validate(config_values)


@lru_cache(maxsize=1)
def get_api_config() -> ApiConfig:
    """Cached accessor for API config."""

    return load_api_config()
