# This file provides dependency factories for FastAPI routes and startup hooks.
# It exists so the database client and registry are created once and shared through dependency injection.
# The setup keeps routers thin and makes endpoint tests easy to override.

from __future__ import annotations

from functools import lru_cache

from sandpit.api.api_config import ApiConfig, get_api_config
from sandpit.api.db_access import DatabaseClient
from sandpit.api.services.name_registry import NameRegistry


@lru_cache(maxsize=1)
def get_database_client() -> DatabaseClient:
    config = get_api_config()
    return DatabaseClient(database_url=config.database_url)


@lru_cache(maxsize=1)
def get_name_registry() -> NameRegistry:
    config = get_api_config()
    db_client = get_database_client()
    return NameRegistry(config=config, db=db_client)


def get_config() -> ApiConfig:
    return get_api_config()
