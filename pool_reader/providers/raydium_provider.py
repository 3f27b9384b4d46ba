"""
Raydium pool provider implementation.
Looks up pools through the Raydium v3 mint search endpoint.
"""

from typing import List

from shared_models.pool_data import Pool, PoolProvider
from .base import BasePoolProvider
from .payloads import RaydiumPoolRecord, RaydiumResponse


class RaydiumProvider(BasePoolProvider):
    """Raydium liquidity pool provider."""

    provider = PoolProvider.RAYDIUM

    async def fetch_pools(self, token_mint_a: str, token_mint_b: str) -> List[Pool]:
        """Get all Raydium pools for the mint pair, largest page the API allows."""
        payload = await self._get_json(
            "/pools/info/mint",
            params={
                'mint1': token_mint_a,
                'mint2': token_mint_b,
                'poolType': 'all',
                'poolSortField': 'default',
                'sortType': 'desc',
                'pageSize': 1000,
                'page': 1
            }
        )

        response = RaydiumResponse.from_json(payload)
        pools = self._to_pools(RaydiumPoolRecord, response.data.data)

        self._log_pools(pools, token_mint_a, token_mint_b)
        return pools
