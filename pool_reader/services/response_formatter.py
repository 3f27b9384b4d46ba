"""
Response payload builders for the pool data endpoint.
"""

from typing import Any, Dict

from shared_models.pool_data import Pool, TokenMintPair
from ..api.schemas import PoolErrorResponse


def format_pool(pool: Pool) -> Dict[str, Any]:
    """Flat JSON object for a selected pool."""
    return pool.model_dump(mode="json")


def format_error(message: str, token_mint_a: str, token_mint_b: str) -> Dict[str, Any]:
    """Error object echoing the requested mints with a UTC RFC 3339 timestamp."""
    return PoolErrorResponse(
        error=message,
        tokens=TokenMintPair(token_mint_a=token_mint_a, token_mint_b=token_mint_b)
    ).model_dump(mode="json")
