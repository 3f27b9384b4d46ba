"""
FastAPI endpoints for the Solana Pool Reader.
"""

from datetime import datetime, timezone
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..api.schemas import HealthResponse, Pool, PoolErrorResponse
from ..core.config import settings
from ..core.logging_config import create_logger
from ..services.pool_aggregator import PoolAggregatorService
from ..services.response_formatter import format_error, format_pool
from ..services.validation import TokenValidationError, validate_token_pair

logger = create_logger(__name__)

NO_POOLS_FOUND = "No pools found"

# Create API router
router = APIRouter()

# Application startup time for uptime calculation
app_start_time = datetime.now(timezone.utc)


def get_aggregator(request: Request) -> PoolAggregatorService:
    """Aggregator created during application startup."""
    return request.app.state.aggregator


@router.get(
    "/api/pool-data/{token_mint_a}/{token_mint_b}",
    response_model=Pool,
    responses={
        400: {"model": PoolErrorResponse, "description": "Malformed token mint"},
        404: {"model": PoolErrorResponse, "description": "No provider listed a pool for the pair"},
    },
)
async def get_pool_data(
    token_mint_a: str,
    token_mint_b: str,
    aggregator: PoolAggregatorService = Depends(get_aggregator)
):
    """
    Get the pool with the highest TVL for a token pair across all providers.

    Args:
        token_mint_a: First token mint (Base58)
        token_mint_b: Second token mint (Base58)

    Returns:
        The selected pool, or an error object echoing the requested mints
    """
    try:
        validate_token_pair(token_mint_a, token_mint_b)
    except TokenValidationError as e:
        logger.info("Rejected malformed token mints", extra={
            "token_mint_a": token_mint_a,
            "token_mint_b": token_mint_b,
            "invalid": e.invalid_mints
        })
        return JSONResponse(
            status_code=400,
            content=format_error(e.message, token_mint_a, token_mint_b)
        )

    logger.info("Pool data request received", extra={
        "token_mint_a": token_mint_a,
        "token_mint_b": token_mint_b
    })

    selection = await aggregator.aggregate(token_mint_a, token_mint_b)

    if not selection.found:
        return JSONResponse(
            status_code=404,
            content=format_error(NO_POOLS_FOUND, token_mint_a, token_mint_b)
        )

    return JSONResponse(status_code=200, content=format_pool(selection.pool))


@router.get("/health", response_model=HealthResponse)
async def health_check(aggregator: PoolAggregatorService = Depends(get_aggregator)):
    """
    Health check endpoint.
    Reports the configured providers without calling them.
    """
    uptime_seconds = (datetime.now(timezone.utc) - app_start_time).total_seconds()
    providers = [provider.provider for provider in aggregator.providers]

    return HealthResponse(
        status="healthy" if providers else "unhealthy",
        version=settings.app_version,
        uptime_seconds=uptime_seconds,
        providers=providers,
        api_timeout_secs=settings.api_timeout_secs
    )
