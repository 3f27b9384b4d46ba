"""
Shared pool data models for the Solana pool reader.
Defines the normalized structures produced by every liquidity provider.
"""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class PoolProvider(str, Enum):
    """Supported liquidity providers, in dispatch order."""
    RAYDIUM = "raydium"
    ORCA = "orca"
    METEORA = "meteora"


class Pool(BaseModel):
    """Normalized liquidity pool record."""
    pool_id: str = Field(..., description="Provider-native pool address or id")
    tvl: float = Field(..., description="Total value locked, USD-equivalent")
    price: float = Field(..., description="Quote price as reported by the provider")

    model_config = ConfigDict(frozen=True)


class TokenMintPair(BaseModel):
    """Pair of token mint identifiers taken verbatim from the request path."""
    token_mint_a: str = Field(..., description="First token mint")
    token_mint_b: str = Field(..., description="Second token mint")

    model_config = ConfigDict(frozen=True)
