# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Applications API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main            (API_HOST / API_PORT from settings)
# =============================================================================

import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings, settings as default_settings
from app.exceptions import (
    ApplicationsApiException,
    applications_api_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.metrics import RequestMetrics
from app.routers import applications, health, metrics
from lib.application_store import ApplicationStore
from lib.seed import SeedDataError, load_seed_data

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if default_settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


API_DESCRIPTION = """
## Applications API

CRUD over application records with filtering, sorting and pagination.

### Listing

`GET /applications?page=1&pageSize=10&filterByName=solar&filterByStatus=approved&sortBy=name&sortOrder=asc`

| Parameter | Default | Notes |
|-----------|---------|-------|
| page | 1 | 1-indexed; pages past the end are empty |
| pageSize | 10 | |
| filterByName | | case-insensitive substring |
| filterByStatus | | in_review, approved or rejected (case-insensitive) |
| sortBy | name | name or status |
| sortOrder | asc | asc or desc |

### Response Envelope

Every response (except 204) has the same shape:

```json
{"success": true, "message": "Success", "responseObject": {...}, "statusCode": 200}
```
"""


def build_store(app_settings: Settings) -> ApplicationStore:
    """Load the seed file into a new store."""
    try:
        records = load_seed_data(app_settings.seed_data_file)
    except SeedDataError as e:
        logger.error(str(e))
        raise
    return ApplicationStore(records)


def route_label(request: Request) -> str:
    """
    Path template of the route that served a request, for metric labels.

    Route paths can be relative to the router prefix, which is then carried
    in root_path. Requests that matched no route fall back to the URL path.
    """
    route = request.scope.get("route")
    if route is None:
        return request.url.path
    return f"{request.scope.get('root_path', '')}{route.path}" or "/"


def create_app(
    store: ApplicationStore | None = None,
    app_settings: Settings | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        store: Store to serve. If None, one is loaded from the seed file
            when the app starts.
        app_settings: Settings override (defaults to the global settings)

    Returns:
        Configured FastAPI app
    """
    app_settings = app_settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan handler.

        - Startup: load seed data into the store (unless one was injected)
        - Shutdown: log
        """
        logger.info(f"Starting Applications API in {app_settings.ENVIRONMENT} mode")
        logger.info(f"CORS origins: {app_settings.cors_origins_list}")

        if app.state.store is None:
            app.state.store = build_store(app_settings)
        logger.info(f"Serving {len(app.state.store)} applications")

        yield

        logger.info("Shutting down Applications API")

    app = FastAPI(
        title="Applications API",
        description=API_DESCRIPTION,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "Application",
                "description": "Create, read, update, delete and list applications",
            },
            {
                "name": "Health Check",
                "description": "API health and readiness checks",
            },
            {
                "name": "Metric",
                "description": "Prometheus metrics",
            },
        ],
    )

    app.state.store = store
    app.state.settings = app_settings
    app.state.metrics = RequestMetrics() if app_settings.METRICS_ENABLED else None

    # =========================================================================
    # Middleware
    # =========================================================================

    # CORS middleware - allows cross-origin requests
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list if app_settings.is_production else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_and_time_requests(request: Request, call_next):
        """Log each request and record its duration."""
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start

        route_path = route_label(request)

        if app.state.metrics is not None:
            app.state.metrics.observe(request.method, route_path, response.status_code, elapsed)

        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({elapsed * 1000:.1f}ms)"
        )
        return response

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(ApplicationsApiException, applications_api_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # =========================================================================
    # Routers
    # =========================================================================

    # Health check endpoints
    app.include_router(
        health.router,
        prefix="/health-check",
        tags=["Health Check"]
    )

    # Application endpoints
    app.include_router(
        applications.router,
        prefix="/applications",
        tags=["Application"]
    )

    # Metrics endpoint
    if app.state.metrics is not None:
        app.include_router(
            metrics.router,
            prefix="/metrics",
            tags=["Metric"]
        )

    @app.get("/", tags=["Root"])
    async def root():
        """
        Root endpoint - returns API info.
        """
        return {
            "name": "Applications API",
            "version": "1.0.0",
            "docs": "/docs",
            "health": "/health-check",
        }

    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn using API_HOST and API_PORT (reloads in development)."""
    uvicorn.run(
        "app.main:app",
        host=default_settings.API_HOST,
        port=default_settings.API_PORT,
        reload=default_settings.is_development,
    )


if __name__ == "__main__":
    run()
