from __future__ import annotations

import asyncio
import math
from typing import List, Optional

import pytest

from pool_reader.core.config import Settings
from pool_reader.providers import MeteoraProvider, OrcaProvider, RaydiumProvider
from pool_reader.providers.base import BasePoolProvider, HttpStatusError, TransportError
from pool_reader.services.pool_aggregator import PoolAggregatorService, select_best_pool
from shared_models.pool_data import Pool, PoolProvider
from tests.conftest import SOL_MINT, USDC_MINT


class FakeProvider(BasePoolProvider):
    def __init__(
        self,
        provider: PoolProvider,
        pools: Optional[List[Pool]] = None,
        error: Optional[Exception] = None,
        barrier: Optional["Rendezvous"] = None,
    ):
        self.provider = provider
        super().__init__(base_url=f"https://{provider.value}.test")
        self._pools = pools or []
        self._error = error
        self._barrier = barrier
        self.calls = []

    async def fetch_pools(self, token_mint_a: str, token_mint_b: str) -> List[Pool]:
        self.calls.append((token_mint_a, token_mint_b))
        if self._barrier is not None:
            await self._barrier.arrive()
        if self._error is not None:
            raise self._error
        return list(self._pools)


class Rendezvous:
    """Completes only once every party has arrived, so it deadlocks if calls run sequentially."""

    def __init__(self, parties: int):
        self._parties = parties
        self._arrived = 0
        self._event: Optional[asyncio.Event] = None

    async def arrive(self) -> None:
        if self._event is None:
            self._event = asyncio.Event()
        self._arrived += 1
        if self._arrived == self._parties:
            self._event.set()
        await asyncio.wait_for(self._event.wait(), timeout=2)


def _pool(pool_id: str, tvl: float, price: float = 1.0) -> Pool:
    return Pool(pool_id=pool_id, tvl=tvl, price=price)


def _providers(raydium=None, orca=None, meteora=None) -> List[FakeProvider]:
    return [
        raydium or FakeProvider(PoolProvider.RAYDIUM),
        orca or FakeProvider(PoolProvider.ORCA),
        meteora or FakeProvider(PoolProvider.METEORA),
    ]


def test_select_best_pool_picks_highest_tvl():
    pools = [_pool("A", 100), _pool("B", 250), _pool("C", 50)]

    assert select_best_pool(pools).pool_id == "B"


def test_select_best_pool_on_empty_collection_returns_none():
    assert select_best_pool([]) is None


def test_select_best_pool_keeps_first_on_ties():
    pools = [_pool("first", 250), _pool("second", 250), _pool("low", 1)]

    assert select_best_pool(pools).pool_id == "first"


def test_select_best_pool_tolerates_nan():
    pools = [_pool("A", 10), _pool("nan", math.nan), _pool("B", 20)]

    assert select_best_pool(pools).pool_id == "B"
    assert select_best_pool([_pool("only-nan", math.nan)]).pool_id == "only-nan"


def test_select_best_pool_replaces_leading_nan():
    pools = [_pool("nan", math.nan), _pool("B", 250), _pool("nan-2", math.nan)]

    assert select_best_pool(pools).pool_id == "B"
    assert select_best_pool([_pool("nan", math.nan), _pool("nan-2", math.nan)]).pool_id == "nan"


def test_aggregate_selects_best_across_providers():
    service = PoolAggregatorService(
        _providers(
            raydium=FakeProvider(PoolProvider.RAYDIUM, [_pool("A", 100)]),
            orca=FakeProvider(PoolProvider.ORCA, [_pool("B", 250)]),
            meteora=FakeProvider(PoolProvider.METEORA, [_pool("C", 50)]),
        )
    )

    selection = asyncio.run(service.aggregate(SOL_MINT, USDC_MINT))

    assert selection.found
    assert selection.pool.pool_id == "B"
    assert selection.failed_providers == []
    assert [outcome.provider for outcome in selection.outcomes] == [
        PoolProvider.RAYDIUM,
        PoolProvider.ORCA,
        PoolProvider.METEORA,
    ]


def test_aggregate_tie_prefers_dispatch_order():
    service = PoolAggregatorService(
        _providers(
            orca=FakeProvider(PoolProvider.ORCA, [_pool("orca", 500)]),
            meteora=FakeProvider(PoolProvider.METEORA, [_pool("meteora", 500)]),
        )
    )

    selection = asyncio.run(service.aggregate(SOL_MINT, USDC_MINT))

    assert selection.pool.pool_id == "orca"


@pytest.mark.parametrize("failing", [0, 1, 2, 3])
def test_aggregate_tolerates_any_number_of_failures(failing):
    errors = [
        TransportError("timeout", "raydium"),
        HttpStatusError("HTTP 502", "orca", 502),
        RuntimeError("unexpected"),
    ]
    kinds = [PoolProvider.RAYDIUM, PoolProvider.ORCA, PoolProvider.METEORA]
    providers = [
        FakeProvider(kind, [_pool(kind.value, 10 * (i + 1))], error=errors[i] if i < failing else None)
        for i, kind in enumerate(kinds)
    ]
    service = PoolAggregatorService(providers)

    selection = asyncio.run(service.aggregate(SOL_MINT, USDC_MINT))

    assert selection.failed_providers == kinds[:failing]
    if failing == 3:
        assert not selection.found
    else:
        assert selection.pool.pool_id == "meteora"
    assert all(provider.calls == [(SOL_MINT, USDC_MINT)] for provider in providers)


def test_aggregate_with_no_pools_anywhere_is_not_an_error():
    service = PoolAggregatorService(_providers())

    selection = asyncio.run(service.aggregate(SOL_MINT, USDC_MINT))

    assert selection.pool is None
    assert selection.failed_providers == []


def test_failed_outcome_carries_error_and_no_pools():
    error = HttpStatusError("HTTP 500", "raydium", 500)
    service = PoolAggregatorService(
        _providers(raydium=FakeProvider(PoolProvider.RAYDIUM, [_pool("x", 1)], error=error))
    )

    selection = asyncio.run(service.aggregate(SOL_MINT, USDC_MINT))

    raydium_outcome = selection.outcomes[0]
    assert not raydium_outcome.ok
    assert raydium_outcome.error is error
    assert raydium_outcome.pools == []


def test_aggregate_runs_providers_concurrently():
    barrier = Rendezvous(parties=3)
    service = PoolAggregatorService(
        [
            FakeProvider(PoolProvider.RAYDIUM, [_pool("A", 1)], barrier=barrier),
            FakeProvider(PoolProvider.ORCA, [_pool("B", 2)], barrier=barrier),
            FakeProvider(PoolProvider.METEORA, [_pool("C", 3)], barrier=barrier),
        ]
    )

    selection = asyncio.run(service.aggregate(SOL_MINT, USDC_MINT))

    assert selection.pool.pool_id == "C"
    assert selection.failed_providers == []


def test_from_settings_builds_providers_in_dispatch_order():
    config = Settings(api_timeout_secs=3, user_agent="ua/1", orca_api_url="https://orca.example/")

    service = PoolAggregatorService.from_settings(config)

    providers = service.providers
    assert [type(provider) for provider in providers] == [RaydiumProvider, OrcaProvider, MeteoraProvider]
    assert all(provider.timeout == 3.0 for provider in providers)
    assert all(provider.user_agent == "ua/1" for provider in providers)
    assert providers[1].base_url == "https://orca.example"
    assert service.get_provider_names() == ["raydium", "orca", "meteora"]
