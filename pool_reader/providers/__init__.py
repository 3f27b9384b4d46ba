"""Liquidity pool provider adapters."""

from typing import Dict, Type

from shared_models.pool_data import PoolProvider
from .base import (
    BasePoolProvider,
    DecodeError,
    HttpStatusError,
    ProviderError,
    TransportError,
)
from .meteora_provider import MeteoraProvider
from .orca_provider import OrcaProvider
from .raydium_provider import RaydiumProvider

# Dispatch order: Raydium, Orca, Meteora
PROVIDER_CLASSES: Dict[PoolProvider, Type[BasePoolProvider]] = {
    PoolProvider.RAYDIUM: RaydiumProvider,
    PoolProvider.ORCA: OrcaProvider,
    PoolProvider.METEORA: MeteoraProvider,
}

__all__ = [
    "BasePoolProvider",
    "DecodeError",
    "HttpStatusError",
    "MeteoraProvider",
    "OrcaProvider",
    "PROVIDER_CLASSES",
    "ProviderError",
    "RaydiumProvider",
    "TransportError",
]
