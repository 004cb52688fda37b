"""Market data protocol — per-DEX pool metric fetching."""
from typing import Protocol

from ..config import PoolConfig
from ..models import PoolMetrics


class MarketDataSource(Protocol):
    """Abstract interface for fetching normalized metrics for a pool."""

    @property
    def source_name(self) -> str: ...

    async def fetch_metrics(self, pool: PoolConfig) -> PoolMetrics: ...
