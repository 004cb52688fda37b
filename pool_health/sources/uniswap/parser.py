"""Pure parsing functions for Uniswap subgraph pool data — no I/O."""
from __future__ import annotations

from typing import Any

from ...models import PoolMetrics
from ..slippage import estimate_slippage

POOL_QUERY = """
query GetPool($poolAddress: String!) {
  pool(id: $poolAddress) {
    totalValueLockedUSD
    liquidityProviderCount
    poolDayData(first: 1, orderBy: date, orderDirection: desc) {
      volumeUSD
    }
  }
}
"""


def parse_volume(pool_data: dict[str, Any]) -> float:
    """Latest daily volume in USD, or 0 when no day data exists."""
    day_data = pool_data.get("poolDayData") or []
    if not day_data:
        return 0.0
    return float(day_data[0].get("volumeUSD") or 0)


def parse_pool(pool_data: dict[str, Any]) -> PoolMetrics:
    """Normalize a subgraph ``pool`` object into PoolMetrics."""
    tvl = float(pool_data.get("totalValueLockedUSD") or 0)
    return PoolMetrics(
        total_liquidity_usd=tvl,
        slippage_1_percent=estimate_slippage(tvl, 0.01),
        volume_24h_usd=parse_volume(pool_data),
        liquidity_provider_count=int(pool_data.get("liquidityProviderCount") or 0),
    )


def extract_pool(response: dict[str, Any], address: str) -> dict[str, Any]:
    """Pull the ``pool`` object out of a GraphQL response.

    Raises:
        RuntimeError: the response carries GraphQL errors.
        LookupError: the subgraph has no pool at ``address``.
    """
    errors = response.get("errors")
    if errors:
        messages = "; ".join(str(e.get("message", e)) for e in errors)
        raise RuntimeError(f"Subgraph error: {messages}")

    pool_data = (response.get("data") or {}).get("pool")
    if not pool_data:
        raise LookupError(f"Pool not found: {address}")
    return pool_data
