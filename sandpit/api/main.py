"""Command-line entrypoint that serves the name registry API with uvicorn."""

from __future__ import annotations

import argparse
import logging
import sys

import uvicorn

from sandpit.api.api_config import get_api_config
from sandpit.api.db_access import DatabaseClient, StorageError
from sandpit.common.logging import configure_logging

LOGGER = logging.getLogger("sandpit.api")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve the sandpit name registry API")
    parser.add_argument("--host", default=None, help="Bind address, defaults to API_HOST")
    parser.add_argument("--port", type=int, default=None, help="Bind port, defaults to API_PORT")
    parser.add_argument("--reload", action="store_true")
    parser.add_argument(
        "--init-schema",
        action="store_true",
        help="Create the names table and exit without serving",
    )
    return parser.parse_args(argv)


def init_schema() -> int:
    config = get_api_config()
    try:
        db = DatabaseClient(database_url=config.database_url)
    except StorageError as exc:
        LOGGER.error("names table setup failed table=%s error=%s", config.names_table_name, exc)
        return 1
    try:
        db.ensure_names_table(config.names_table_name)
    except StorageError as exc:
        LOGGER.error("names table setup failed table=%s error=%s", config.names_table_name, exc)
        return 1
    finally:
        db.dispose()
    LOGGER.info("names table ready table=%s", config.names_table_name)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    config = get_api_config()
    configure_logging(config.log_level)

    if args.init_schema:
        return init_schema()

    uvicorn.run(
        "sandpit.api.app:app",
        host=args.host or config.host,
        port=args.port or config.port,
        reload=args.reload,
        log_level=config.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
