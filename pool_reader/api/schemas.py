"""
Pydantic schemas for the Solana Pool Reader API.
Uses shared models for consistency across services.
"""

from datetime import datetime, timezone
from typing import List, Optional, Dict, Any, Literal
from pydantic import BaseModel, Field

from shared_models.pool_data import Pool, PoolProvider, TokenMintPair


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PoolErrorResponse(BaseModel):
    """Model for pool lookup errors, echoing the requested mints."""
    error: str = Field(..., description="Error message")
    tokens: TokenMintPair = Field(..., description="Requested token mints")
    timestamp: datetime = Field(default_factory=_utcnow, description="Error timestamp (UTC)")


class ErrorResponse(BaseModel):
    """Model for generic error responses."""
    error: str = Field(..., description="Error message")
    error_code: str = Field(..., description="Error code")
    timestamp: datetime = Field(default_factory=_utcnow, description="Error timestamp (UTC)")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")


class HealthResponse(BaseModel):
    """Model for health check response."""
    status: Literal["healthy", "unhealthy"] = Field(..., description="Service status")
    timestamp: datetime = Field(default_factory=_utcnow, description="Health check timestamp")
    version: str = Field(..., description="Service version")
    uptime_seconds: float = Field(..., description="Service uptime in seconds")
    providers: List[PoolProvider] = Field(default_factory=list, description="Configured providers")
    api_timeout_secs: int = Field(..., description="Per-provider request timeout")


__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "Pool",
    "PoolErrorResponse",
    "PoolProvider",
    "TokenMintPair",
]
