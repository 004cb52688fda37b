"""Uniswap v3 subgraph market data source."""
from __future__ import annotations

import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ...config import PoolConfig, UniswapConfig
from ...models import PoolMetrics
from . import parser

logger = logging.getLogger(__name__)


class UniswapSubgraphSource:
    """Fetch pool TVL, volume and LP count from a Uniswap subgraph."""

    def __init__(self, config: UniswapConfig) -> None:
        self.subgraph_url = config.subgraph_url
        self.timeout = config.timeout

    @property
    def source_name(self) -> str:
        return "uniswap"

    async def _query(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """POST a GraphQL query and return the decoded response."""
        payload = {"query": query, "variables": variables}

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        async with aiohttp.ClientSession(connector=connector) as session:
            async with session.post(
                self.subgraph_url,
                json=payload,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                if response.status != 200:
                    raise RuntimeError(
                        f"Subgraph request failed: HTTP {response.status}"
                    )
                return await response.json()

    async def fetch_metrics(self, pool: PoolConfig) -> PoolMetrics:
        address = pool.address.lower()
        logger.debug("Querying Uniswap subgraph for pool %s", address)

        response = await self._query(parser.POOL_QUERY, {"poolAddress": address})
        pool_data = parser.extract_pool(response, address)
        metrics = parser.parse_pool(pool_data)

        logger.info(
            "Pool %s — TVL: $%.2f  Volume 24h: $%.2f  Slippage 1%%: %.2f%%  LPs: %d",
            pool.id,
            metrics.total_liquidity_usd,
            metrics.volume_24h_usd,
            metrics.slippage_1_percent,
            metrics.liquidity_provider_count,
        )
        return metrics
