"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Annotated

import structlog
from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from iam.presentation import router as auth_router
from infrastructure.database.dependencies import close_database_connections
from infrastructure.database.exceptions import StorageUnavailableError
from infrastructure.database.health import DatabaseHealthGate, get_health_gate
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe
from infrastructure.settings import (
    StorageBackend,
    get_auth_settings,
    get_settings,
    get_storage_settings,
)
from infrastructure.version import __version__
from profiles.presentation import router as profiles_router
from shared_kernel.middleware import assign_request_id

logger = structlog.get_logger()


@asynccontextmanager
async def linkbio_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Startup warnings for insecure configuration
    - Engine lifecycle (created lazily, disposed on shutdown)
    """
    settings = get_settings()
    configure_logging(debug=settings.debug)
    probe = DefaultStartupProbe()

    if get_auth_settings().uses_insecure_secret:
        probe.insecure_jwt_secret_in_use(environment=settings.environment.value)
    probe.application_started(
        app_name=settings.app_name,
        environment=settings.environment.value,
        backend=get_storage_settings().backend.value,
    )

    yield

    await close_database_connections()
    probe.application_stopped()


app = FastAPI(
    title="Linkbio API",
    description="Link-in-bio profiles with a public projection",
    version=__version__,
    lifespan=linkbio_lifespan,
)

app.middleware("http")(assign_request_id)

app.include_router(auth_router)
app.include_router(profiles_router)


def describe_validation_error(exc: RequestValidationError) -> str:
    """Render the first validation error as a single message."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    first = errors[0]
    location = ".".join(
        str(part) for part in first.get("loc", ()) if part not in ("body", "query")
    )
    message = first.get("msg", "invalid value")
    if location:
        return f"Invalid request: {location}: {message}"
    return f"Invalid request: {message}"


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render HTTP errors as ``{"error": message}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures as 400 errors."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": describe_validation_error(exc)},
    )


@app.exception_handler(StorageUnavailableError)
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures and hide their details from the caller."""
    logger.error(
        "unhandled_exception",
        method=request.method,
        path=request.url.path,
        request_id=getattr(request.state, "request_id", None),
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}


@app.get("/health/db")
async def health_db(
    gate: Annotated[DatabaseHealthGate, Depends(get_health_gate)],
) -> dict:
    """Check database reachability and the storage backend serving requests.

    The database is pinged on every call unless the memory backend is
    configured; the result also refreshes the gate used by other requests.
    """
    backend = gate.status.backend
    reachable = None if backend == StorageBackend.MEMORY else await gate.check()
    serving = "postgres" if await gate.use_database() else "memory"
    current = gate.status

    return {
        "status": "degraded" if reachable is False else "ok",
        "backend": backend.value,
        "serving": serving,
        "databaseReachable": reachable,
        "lastError": current.last_error,
    }
