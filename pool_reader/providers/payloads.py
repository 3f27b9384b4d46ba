"""
Provider payload schemas.

Each provider nests its pool records differently and encodes numbers either as
JSON numbers or as numeric strings. The models below describe only the fields
the service consumes, and every field carries a fallback so that a malformed
record still maps to a Pool instead of failing the whole provider call.
"""

import math
from typing import Annotated, Any, Dict, List, Optional
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

UNKNOWN_POOL_ID = "Unknown"


def coerce_float(value: Any) -> float:
    """Parse a JSON number or numeric string, falling back to 0.0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    if not isinstance(value, (int, float, str)):
        return 0.0
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def coerce_pool_id(value: Any) -> str:
    if isinstance(value, str):
        return value
    return UNKNOWN_POOL_ID


def coerce_address(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def coerce_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def coerce_mapping(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


LenientFloat = Annotated[float, BeforeValidator(coerce_float)]
PoolId = Annotated[str, BeforeValidator(coerce_pool_id)]
Address = Annotated[Optional[str], BeforeValidator(coerce_address)]
RecordList = Annotated[List[Any], BeforeValidator(coerce_list)]


class ProviderPayload(BaseModel):
    """Base model for provider payload fragments."""

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def from_json(cls, value: Any):
        """Validate a raw JSON value, treating non-objects as empty objects."""
        return cls.model_validate(coerce_mapping(value))


# Raydium: {"data": {"data": [{"id", "tvl", "price"}, ...]}}

class RaydiumPoolRecord(ProviderPayload):
    pool_id: PoolId = Field(default=UNKNOWN_POOL_ID, alias="id")
    tvl: LenientFloat = 0.0
    price: LenientFloat = 0.0


class RaydiumPage(ProviderPayload):
    data: RecordList = Field(default_factory=list)


class RaydiumResponse(ProviderPayload):
    data: Annotated[RaydiumPage, BeforeValidator(coerce_mapping)] = Field(default_factory=RaydiumPage)


# Orca: {"data": [{"address", "tvlUsdc", "price", "tokenA": {"address"}, "tokenB": {"address"}}, ...]}

class OrcaToken(ProviderPayload):
    address: Address = None


class OrcaPoolRecord(ProviderPayload):
    pool_id: PoolId = Field(default=UNKNOWN_POOL_ID, alias="address")
    tvl: LenientFloat = Field(default=0.0, alias="tvlUsdc")
    price: LenientFloat = 0.0
    token_a: Annotated[OrcaToken, BeforeValidator(coerce_mapping)] = Field(default_factory=OrcaToken, alias="tokenA")
    token_b: Annotated[OrcaToken, BeforeValidator(coerce_mapping)] = Field(default_factory=OrcaToken, alias="tokenB")

    def matches_pair(self, token_mint_a: str, token_mint_b: str) -> bool:
        """True when the record's two token addresses equal the pair in either order."""
        addresses = (self.token_a.address, self.token_b.address)
        return addresses in ((token_mint_a, token_mint_b), (token_mint_b, token_mint_a))


class OrcaResponse(ProviderPayload):
    data: RecordList = Field(default_factory=list)


# Meteora: {"groups": [{"pairs": [{"address", "liquidity", "current_price"}, ...]}, ...]}

class MeteoraPairRecord(ProviderPayload):
    pool_id: PoolId = Field(default=UNKNOWN_POOL_ID, alias="address")
    tvl: LenientFloat = Field(default=0.0, alias="liquidity")
    price: LenientFloat = Field(default=0.0, alias="current_price")


class MeteoraGroup(ProviderPayload):
    pairs: RecordList = Field(default_factory=list)


class MeteoraResponse(ProviderPayload):
    groups: RecordList = Field(default_factory=list)
