"""DexScreener public API market data source."""
from __future__ import annotations

import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ...config import DexScreenerConfig, PoolConfig
from ...models import PoolMetrics
from . import parser

logger = logging.getLogger(__name__)


class DexScreenerSource:
    """Fetch pair liquidity and 24h volume from the DexScreener API."""

    def __init__(self, config: DexScreenerConfig) -> None:
        self.base_url = config.base_url.rstrip("/")
        self.timeout = config.timeout

    @property
    def source_name(self) -> str:
        return "dexscreener"

    async def _get(self, url: str) -> dict[str, Any]:
        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        async with aiohttp.ClientSession(connector=connector) as session:
            async with session.get(
                url,
                headers={"accept": "application/json"},
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                if response.status != 200:
                    raise RuntimeError(
                        f"DexScreener request failed: HTTP {response.status}"
                    )
                return await response.json()

    async def fetch_metrics(self, pool: PoolConfig) -> PoolMetrics:
        chain = parser.chain_id(pool.chain)
        url = f"{self.base_url}/pairs/{chain}/{pool.address}"
        logger.debug("Fetching DexScreener pair %s on %s", pool.address, chain)

        response = await self._get(url)
        pair = parser.extract_pair(response, pool.address)
        metrics = parser.parse_pair(pair)

        logger.info(
            "Pool %s — TVL: $%.2f  Volume 24h: $%.2f  Slippage 1%%: %.2f%%",
            pool.id,
            metrics.total_liquidity_usd,
            metrics.volume_24h_usd,
            metrics.slippage_1_percent,
        )
        return metrics
