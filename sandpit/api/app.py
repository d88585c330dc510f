# This file builds the FastAPI application and registers all API routers.
# It exists so startup behavior, middleware, and error handling are configured in one place.
# The app adds request IDs, timing headers, boundary request logging, and Prometheus metrics.
# Keeping bootstrap logic centralized makes deployment and testing more predictable.

from __future__ import annotations

import logging
import time
import uuid

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import RequestResponseEndpoint

from sandpit.api.api_config import get_api_config
from sandpit.api.db_access import StorageError
from sandpit.api.dependencies import get_database_client
from sandpit.api.error_handlers import register_error_handlers
from sandpit.api.routers.health import router as health_router
from sandpit.api.routers.names import router as names_router
from sandpit.common.logging import configure_logging

LOGGER = logging.getLogger("sandpit.api")
UNMATCHED_ROUTE_LABEL = "unmatched"

API_HTTP_REQUESTS_TOTAL = Counter(
    "sandpit_http_requests_total",
    "Total number of HTTP requests processed by the API.",
    ["method", "path", "status_code"],
)
API_HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "sandpit_http_request_duration_seconds",
    "API request duration in seconds.",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
API_HTTP_INFLIGHT_REQUESTS = Gauge(
    "sandpit_http_inflight_requests",
    "Number of API requests currently being processed.",
    ["method"],
)


def create_app() -> FastAPI:
    """Create configured FastAPI application instance."""

    config = get_api_config()
    configure_logging(config.log_level)

    app = FastAPI(
        title=config.api_name,
        description="Stores names and lists them back in insertion order as plain text.",
        version=config.app_version,
        openapi_tags=[
            {"name": "health", "description": "Service liveness, readiness, and version metadata."},
            {"name": "names", "description": "Add a name and list every stored name."},
        ],
    )

    if config.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def request_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        method_label = request.method
        request_path = request.url.path
        path_label = UNMATCHED_ROUTE_LABEL
        started = time.perf_counter()
        status_code = 500
        LOGGER.info("request started method=%s path=%s request_id=%s", method_label, request_path, request_id)
        API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label).inc()
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            duration_ms = (time.perf_counter() - started) * 1000.0

            response.headers["x-request-id"] = request_id
            response.headers["x-response-time-ms"] = f"{duration_ms:.2f}"
            return response
        finally:
            # Label by route template so path parameters do not create new series.
            route = request.scope.get("route")
            path_label = getattr(route, "path_format", None) or UNMATCHED_ROUTE_LABEL
            duration_s = time.perf_counter() - started
            LOGGER.info(
                "request finished method=%s path=%s request_id=%s status=%s duration_ms=%.2f",
                method_label,
                request_path,
                request_id,
                status_code,
                duration_s * 1000.0,
            )
            API_HTTP_REQUESTS_TOTAL.labels(
                method=method_label,
                path=path_label,
                status_code=str(status_code),
            ).inc()
            API_HTTP_REQUEST_DURATION_SECONDS.labels(
                method=method_label,
                path=path_label,
            ).observe(duration_s)
            API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label).dec()

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.on_event("startup")
    def apply_schema() -> None:
        app.state.names_schema_applied = False
        if not config.create_schema_on_startup:
            return
        try:
            get_database_client().ensure_names_table(config.names_table_name)
        except (StorageError, ValueError) as exc:
            LOGGER.warning("names table setup skipped table=%s error=%s", config.names_table_name, exc)
            return
        app.state.names_schema_applied = True
        LOGGER.info("names table ready table=%s", config.names_table_name)

    register_error_handlers(app)

    app.include_router(health_router)
    # Only the primary prefix is published in the OpenAPI schema.
    for index, prefix in enumerate(config.route_prefixes()):
        app.include_router(names_router, prefix=prefix, include_in_schema=index == 0)

    return app


app = create_app()
