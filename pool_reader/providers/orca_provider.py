"""
Orca pool provider implementation.
Orca only filters by a single token, so pools are matched to the pair client-side.
"""

from typing import List

from shared_models.pool_data import Pool, PoolProvider
from .base import BasePoolProvider
from .payloads import OrcaPoolRecord, OrcaResponse
from ..core.logging_config import create_logger

logger = create_logger(__name__)

# Upper bound accepted by the Orca pools endpoint
ORCA_PAGE_LIMIT = 65535


class OrcaProvider(BasePoolProvider):
    """Orca whirlpool provider."""

    provider = PoolProvider.ORCA

    async def fetch_pools(self, token_mint_a: str, token_mint_b: str) -> List[Pool]:
        """Get Orca pools listing token A and keep those trading exactly the pair."""
        payload = await self._get_json(
            "/v2/solana/pools",
            params={
                'token': token_mint_a,
                'limit': ORCA_PAGE_LIMIT
            }
        )

        response = OrcaResponse.from_json(payload)

        pools = []
        for raw in response.data:
            record = OrcaPoolRecord.from_json(raw)
            if record.matches_pair(token_mint_a, token_mint_b):
                pools.append(self._create_pool(record))

        logger.debug("Filtered Orca pools by pair", extra={
            "provider": self.name,
            "listed": len(response.data),
            "matched": len(pools)
        })

        self._log_pools(pools, token_mint_a, token_mint_b)
        return pools
