"""
Main FastAPI application for the Solana Pool Reader.
Includes lifespan management for provider clients.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import time

from .core.config import settings
from .core.logging_config import setup_logging, create_logger
from .api.endpoints import router as api_router
from .api.schemas import ErrorResponse
from .services.pool_aggregator import PoolAggregatorService

# Setup logging first
setup_logging(settings)
logger = create_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.
    Opens provider clients on startup and closes them on shutdown.
    """
    logger.info("Starting Solana Pool Reader", extra={
        "version": settings.app_version,
        "bind_address": settings.get_bind_address(),
        "api_timeout_secs": settings.api_timeout_secs
    })

    aggregator = PoolAggregatorService.from_settings(settings)
    try:
        await aggregator.initialize()
    except Exception as e:
        logger.error("Failed to start Solana Pool Reader", extra={
            "error": str(e)
        })
        raise

    app.state.aggregator = aggregator
    logger.info("Solana Pool Reader started successfully")

    yield  # Application is running

    logger.info("Shutting down Solana Pool Reader")
    await aggregator.shutdown()


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Highest-TVL liquidity pool lookup across Raydium, Orca and Meteora",
    version=settings.app_version,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    openapi_url="/openapi.json" if settings.debug else None,
    lifespan=lifespan
)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all HTTP requests and responses."""
    start_time = time.time()

    logger.info("Request received", extra={
        "method": request.method,
        "url": str(request.url),
        "client_ip": request.client.host if request.client else None,
        "user_agent": request.headers.get("user-agent")
    })

    try:
        response = await call_next(request)

        process_time = time.time() - start_time

        logger.info("Request completed", extra={
            "method": request.method,
            "url": str(request.url),
            "status_code": response.status_code,
            "process_time": round(process_time, 4),
            "client_ip": request.client.host if request.client else None
        })

        response.headers["X-Process-Time"] = str(process_time)

        return response

    except Exception as e:
        process_time = time.time() - start_time

        logger.error("Request failed", extra={
            "method": request.method,
            "url": str(request.url),
            "error": str(e),
            "process_time": round(process_time, 4),
            "client_ip": request.client.host if request.client else None
        })

        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="Internal server error",
                error_code="INTERNAL_ERROR"
            ).model_dump(mode="json")
        )


@app.exception_handler(404)
async def not_found_handler(request: Request, exc):
    """Handle unknown routes with a structured response."""
    return JSONResponse(
        status_code=404,
        content=ErrorResponse(
            error="Endpoint not found",
            error_code="NOT_FOUND",
            details={
                "path": request.url.path,
                "method": request.method
            }
        ).model_dump(mode="json")
    )


# Include API routes
app.include_router(api_router, tags=["Pool Data API"])


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint with service information."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "status": "running",
        "docs_url": "/docs" if settings.debug else "disabled",
        "timestamp": datetime.now(timezone.utc)
    }


def run() -> None:
    """Run the service with uvicorn on the configured address."""
    import uvicorn

    uvicorn.run(
        "pool_reader.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=True
    )


if __name__ == "__main__":
    run()
