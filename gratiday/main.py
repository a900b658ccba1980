"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from gratiday.api import categories, quotes, stats, users
from gratiday.config import get_settings
from gratiday.database import get_database
from gratiday.errors import (
    DatabaseConnectionError,
    DependencyError,
    DuplicateError,
    GratidayError,
    QueryError,
    ReferenceNotFoundError,
    StateError,
    ValidationError,
)

settings = get_settings()
logger = logging.getLogger(__name__)

# Most specific first; the first matching class wins.
ERROR_STATUS_CODES: list[tuple[type[GratidayError], int]] = [
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (DuplicateError, status.HTTP_409_CONFLICT),
    (ReferenceNotFoundError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (DependencyError, status.HTTP_409_CONFLICT),
    (StateError, status.HTTP_400_BAD_REQUEST),
    (DatabaseConnectionError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (QueryError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logging.basicConfig(level=settings.log_level)
    yield
    # Shutdown: release pooled connections
    get_database().disconnect()


app = FastAPI(
    title="GratiDay API",
    description="Gratitude quotes with scheduled publication",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(GratidayError)
async def gratiday_error_handler(request: Request, exc: GratidayError) -> JSONResponse:
    """Surface domain and infrastructure errors with a matching status code."""
    status_code = next(
        (code for error_type, code in ERROR_STATUS_CODES if isinstance(exc, error_type)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    content: dict = {"detail": str(exc)}
    if isinstance(exc, ValidationError):
        content["errors"] = exc.errors
    return JSONResponse(status_code=status_code, content=content)


# Register routers
app.include_router(users.router)
app.include_router(categories.router)
app.include_router(quotes.router)
app.include_router(stats.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
