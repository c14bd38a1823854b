"""
Floor OEE - Main FastAPI Application

This is the main entry point for the Floor OEE API. At startup it loads the
automatic status, manual-override and production-order files, builds the
metrics engine once, and serves downtime attribution and OEE results from
that read-only snapshot.
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response
import structlog

from floor_oee.config import settings
from floor_oee.api.v1 import downtime, oee
from floor_oee.services.data_loader import load_engine
from floor_oee.utils.exceptions import DataSourceError, FloorOEEException
from floor_oee.utils.logger import configure_logging

configure_logging(settings.LOG_LEVEL)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    # Startup
    logger.info("Starting Floor OEE API", environment=settings.ENVIRONMENT)
    try:
        app.state.engine = load_engine(settings)
        logger.info("Metrics engine ready")
    except DataSourceError as e:
        app.state.engine = None
        logger.error("Metrics engine could not be built", error=e.message, details=e.details)

    yield

    # Shutdown
    logger.info("Shutting down Floor OEE API")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="""
    Equipment downtime attribution and OEE analytics.

    This API provides:
    - Reconciliation of automatic and manually-corrected status intervals
    - Downtime totals per equipment, day and reason
    - Daily Availability, Performance, Quality and OEE per equipment
    - Per-equipment and overall OEE averages
    """,
    version=settings.VERSION,
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None,
    openapi_url="/openapi.json" if settings.ENVIRONMENT != "production" else None,
    lifespan=lifespan
)

# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)


# Global exception handlers
@app.exception_handler(FloorOEEException)
async def floor_oee_exception_handler(request: Request, exc: FloorOEEException) -> JSONResponse:
    """Handle custom Floor OEE exceptions."""
    logger.error(
        "Floor OEE exception occurred",
        exception_type=type(exc).__name__,
        message=str(exc),
        path=request.url.path,
        method=request.method
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.error_code,
            "message": exc.message,
            "details": exc.details
        }
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors."""
    logger.warning(
        "Validation error occurred",
        errors=exc.errors(),
        path=request.url.path,
        method=request.method
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": [
                {"loc": list(error.get("loc", ())), "msg": error.get("msg")}
                for error in exc.errors()
            ]
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(
        "Unexpected error occurred",
        exception_type=type(exc).__name__,
        message=str(exc),
        path=request.url.path,
        method=request.method,
        exc_info=True
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "INTERNAL_SERVER_ERROR",
            "message": "An unexpected error occurred",
            "details": None if settings.ENVIRONMENT == "production" else str(exc)
        }
    )


# Health check endpoints
@app.get("/health", tags=["Health"])
async def health_check(request: Request) -> Dict[str, Any]:
    """Health check reporting whether the metrics engine is loaded."""
    engine_ready = getattr(request.app.state, "engine", None) is not None
    return {
        "status": "healthy" if engine_ready else "degraded",
        "service": settings.APP_NAME,
        "version": settings.VERSION,
        "timestamp": datetime.now().isoformat(timespec="seconds"),
        "components": {
            "engine": "ready" if engine_ready else "not_ready",
            "api": "healthy"
        }
    }


# Metrics endpoint for Prometheus
if settings.ENABLE_METRICS:
    @app.get("/metrics", tags=["Monitoring"])
    async def metrics() -> Response:
        """Prometheus metrics endpoint."""
        return Response(
            generate_latest(),
            media_type=CONTENT_TYPE_LATEST
        )


# Include API routers
app.include_router(downtime.router, prefix="/api/v1/downtime", tags=["Downtime"])
app.include_router(oee.router, prefix="/api/v1/oee", tags=["OEE & Analytics"])


# Root endpoint
@app.get("/", tags=["Root"])
async def root() -> Dict[str, str]:
    """Root endpoint with API information."""
    return {
        "message": settings.APP_NAME,
        "version": settings.VERSION,
        "docs": "/docs" if settings.ENVIRONMENT != "production" else "Documentation not available in production",
        "health": "/health"
    }


def run() -> None:
    """Console entry point."""
    import uvicorn

    uvicorn.run(
        "floor_oee.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
        access_log=True
    )


if __name__ == "__main__":
    run()
