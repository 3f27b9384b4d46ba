"""
Pool aggregator service for the Solana Pool Reader.
Fans a token pair out to every provider concurrently and picks the deepest pool.
"""

import asyncio
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from shared_models.pool_data import Pool, PoolProvider, TokenMintPair
from ..core.config import Settings
from ..core.logging_config import create_logger
from ..providers import PROVIDER_CLASSES
from ..providers.base import BasePoolProvider, ProviderError

logger = create_logger(__name__)


@dataclass(frozen=True)
class ProviderOutcome:
    """Tagged result of one provider call."""
    provider: PoolProvider
    pools: List[Pool] = field(default_factory=list)
    error: Optional[ProviderError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class PoolSelection:
    """Best pool for a pair, or None when no provider returned one."""
    pool: Optional[Pool]
    outcomes: List[ProviderOutcome] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.pool is not None

    @property
    def failed_providers(self) -> List[PoolProvider]:
        return [outcome.provider for outcome in self.outcomes if not outcome.ok]


def select_best_pool(pools: Sequence[Pool]) -> Optional[Pool]:
    """
    Pick the pool with the highest TVL.

    Ties keep the first pool encountered. A NaN TVL ranks below every
    number: a NaN best is replaced by the next pool with a numeric TVL, and
    a NaN pool never replaces a numeric best. If every TVL is NaN the first
    pool is returned.
    """
    best: Optional[Pool] = None
    for pool in pools:
        if best is None:
            best = pool
        elif math.isnan(best.tvl):
            if not math.isnan(pool.tvl):
                best = pool
        elif pool.tvl > best.tvl:
            best = pool
    return best


class PoolAggregatorService:
    """Service that queries every provider for a pair and selects the best pool."""

    def __init__(self, providers: Sequence[BasePoolProvider]):
        self._providers: List[BasePoolProvider] = list(providers)

    @classmethod
    def from_settings(cls, config: Settings) -> "PoolAggregatorService":
        """Build one provider per supported venue from the given settings."""
        urls = config.get_provider_urls()
        providers = [
            provider_class(
                base_url=urls[provider],
                timeout=float(config.api_timeout_secs),
                user_agent=config.user_agent
            )
            for provider, provider_class in PROVIDER_CLASSES.items()
        ]
        return cls(providers)

    @property
    def providers(self) -> List[BasePoolProvider]:
        return list(self._providers)

    def get_provider_names(self) -> List[str]:
        return [provider.name for provider in self._providers]

    async def initialize(self) -> None:
        """Open HTTP clients for all providers."""
        for provider in self._providers:
            await provider.connect()
        logger.info("Pool aggregator initialized", extra={
            "providers": self.get_provider_names()
        })

    async def shutdown(self) -> None:
        """Close HTTP clients for all providers."""
        for provider in self._providers:
            try:
                await provider.disconnect()
            except Exception as e:
                logger.warning("Error disconnecting provider", extra={
                    "provider": provider.name,
                    "error": str(e)
                })
        logger.info("Pool aggregator shutdown complete")

    async def _fetch_from_provider(self, provider: BasePoolProvider, pair: TokenMintPair) -> ProviderOutcome:
        """Run one provider and turn any failure into a tagged outcome."""
        try:
            pools = await provider.fetch_pools(pair.token_mint_a, pair.token_mint_b)
            return ProviderOutcome(provider=provider.provider, pools=pools)

        except ProviderError as e:
            logger.error("Provider error while fetching pools", extra={
                "provider": provider.name,
                "error_kind": e.kind,
                "error": str(e),
                "token_mint_a": pair.token_mint_a,
                "token_mint_b": pair.token_mint_b
            })
            return ProviderOutcome(provider=provider.provider, error=e)

        except Exception as e:
            logger.error("Unexpected error fetching pools", extra={
                "provider": provider.name,
                "error": repr(e),
                "token_mint_a": pair.token_mint_a,
                "token_mint_b": pair.token_mint_b
            })
            return ProviderOutcome(
                provider=provider.provider,
                error=ProviderError(f"Unexpected error: {e!r}", provider.name)
            )

    async def aggregate(self, token_mint_a: str, token_mint_b: str) -> PoolSelection:
        """
        Query all providers concurrently and select the pool with the highest TVL.

        Args:
            token_mint_a: First token mint
            token_mint_b: Second token mint

        Returns:
            PoolSelection with the chosen pool, or no pool when every provider
            failed or none listed the pair
        """
        pair = TokenMintPair(token_mint_a=token_mint_a, token_mint_b=token_mint_b)

        outcomes = await asyncio.gather(
            *(self._fetch_from_provider(provider, pair) for provider in self._providers)
        )

        all_pools: List[Pool] = []
        for outcome in outcomes:
            all_pools.extend(outcome.pools)

        summary: Dict[str, object] = {
            outcome.provider.value: len(outcome.pools) if outcome.ok else outcome.error.kind
            for outcome in outcomes
        }

        if not all_pools:
            logger.warning("No pools found for pair", extra={
                "token_mint_a": token_mint_a,
                "token_mint_b": token_mint_b,
                "providers": summary
            })
            return PoolSelection(pool=None, outcomes=list(outcomes))

        best_pool = await asyncio.get_running_loop().run_in_executor(
            None, select_best_pool, all_pools
        )

        logger.info("Selected best pool", extra={
            "token_mint_a": token_mint_a,
            "token_mint_b": token_mint_b,
            "pool_count": len(all_pools),
            "pool_id": best_pool.pool_id,
            "tvl": best_pool.tvl,
            "providers": summary
        })

        return PoolSelection(pool=best_pool, outcomes=list(outcomes))
