"""FastAPI application entry point.

Configures the search API with logging, exception handling,
metrics and health checks.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from review_ingest import __version__
from review_ingest.api.routes import router
from review_ingest.config import get_settings
from review_ingest.exceptions import ErrorCode, ReviewIngestError
from review_ingest.logging_config import get_logger, setup_logging
from review_ingest.observability.metrics import (
    MetricsMiddleware,
    get_metrics,
    get_metrics_content_type,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = get_settings()
    setup_logging(level=settings.log_level)
    logger.info(
        "Starting review search API",
        extra={
            "version": __version__,
            "environment": settings.environment.value,
        },
    )

    yield

    logger.info("Shutting down review search API")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Review Ingest",
        description="Semantic search over ingested album reviews",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.add_middleware(MetricsMiddleware)
    app.add_exception_handler(ReviewIngestError, review_ingest_exception_handler)

    app.add_api_route("/health", health_check, methods=["GET"], tags=["Health"])
    app.add_api_route("/health/ready", readiness_check, methods=["GET"], tags=["Health"])
    app.add_api_route("/health/live", liveness_check, methods=["GET"], tags=["Health"])
    app.add_api_route("/metrics", metrics_endpoint, methods=["GET"], tags=["Metrics"])
    app.include_router(router)

    return app


async def review_ingest_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Convert ReviewIngestError exceptions to structured JSON responses."""
    if not isinstance(exc, ReviewIngestError):
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": ErrorCode.INTERNAL_ERROR.value,
                    "message": str(exc),
                    "details": {},
                }
            },
        )

    logger.error(
        f"Request failed: {exc.message}",
        extra={
            "error_code": exc.code.value,
            "path": request.url.path,
        },
    )

    return JSONResponse(
        status_code=_get_status_code(exc.code),
        content=exc.to_dict(),
    )


_STATUS_CODES = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.VECTOR_DIMENSION_MISMATCH: 400,
    ErrorCode.COLLECTION_NOT_FOUND: 404,
    ErrorCode.COLLECTION_EXISTS: 409,
    ErrorCode.LLM_RATE_LIMIT: 429,
    ErrorCode.SEARCH_ERROR: 502,
    ErrorCode.EMBEDDING_SERVICE_ERROR: 502,
    ErrorCode.LLM_TIMEOUT: 504,
    ErrorCode.NAVIGATION_TIMEOUT: 504,
}


def _get_status_code(code: ErrorCode) -> int:
    """Map error code to HTTP status code."""
    return _STATUS_CODES.get(code, 500)


async def health_check() -> dict[str, Any]:
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.now(UTC).isoformat(),
    }


async def readiness_check() -> dict[str, Any]:
    """Readiness probe.

    Returns:
        Readiness status with component checks.
    """
    settings = get_settings()
    checks: dict[str, str] = {
        "config": "ok",
        "collection": settings.qdrant.collection_name,
    }

    return {
        "status": "ready",
        "checks": checks,
        "timestamp": datetime.now(UTC).isoformat(),
    }


async def liveness_check() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "alive"}


async def metrics_endpoint() -> Response:
    """Expose Prometheus metrics."""
    return Response(content=get_metrics(), media_type=get_metrics_content_type())


app = create_app()
