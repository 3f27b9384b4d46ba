"""
Meteora pool provider implementation.
Reads DLMM pairs grouped by token pair and flattens the groups.
"""

from typing import List

from shared_models.pool_data import Pool, PoolProvider
from .base import BasePoolProvider
from .payloads import MeteoraGroup, MeteoraPairRecord, MeteoraResponse


class MeteoraProvider(BasePoolProvider):
    """Meteora DLMM provider."""

    provider = PoolProvider.METEORA

    async def fetch_pools(self, token_mint_a: str, token_mint_b: str) -> List[Pool]:
        payload = await self._get_json(
            "/pair/all_by_groups",
            params={'include_pool_token_pairs': f"{token_mint_a}-{token_mint_b}"}
        )

        response = MeteoraResponse.from_json(payload)

        pools = []
        for raw_group in response.groups:
            group = MeteoraGroup.from_json(raw_group)
            pools.extend(self._to_pools(MeteoraPairRecord, group.pairs))

        self._log_pools(pools, token_mint_a, token_mint_b)
        return pools
