from __future__ import annotations

import asyncio
from typing import Callable, List

import httpx
import pytest

from shared_models.pool_data import Pool
from pool_reader.providers.base import BasePoolProvider

SOL_MINT = "So11111111111111111111111111111111111111112"
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


def run_fetch(provider: BasePoolProvider, token_mint_a: str, token_mint_b: str) -> List[Pool]:
    async def _run():
        async with provider:
            return await provider.fetch_pools(token_mint_a, token_mint_b)

    return asyncio.run(_run())


@pytest.fixture
def recorded_requests() -> List[httpx.Request]:
    return []


@pytest.fixture
def json_transport(recorded_requests) -> Callable[..., httpx.MockTransport]:
    """Build a MockTransport answering every request with the given JSON body."""

    def _build(payload, status_code: int = 200) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return httpx.Response(status_code, json=payload)

        return httpx.MockTransport(handler)

    return _build
