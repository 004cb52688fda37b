"""Price impact estimate shared by the market data sources."""
from __future__ import annotations

MAX_SLIPPAGE_PERCENT = 50.0


def estimate_slippage(liquidity_usd: float, trade_fraction: float) -> float:
    """Estimate price impact (%) of a trade sized at ``trade_fraction`` of TVL.

    Uses constant-product pricing against one side of the pool, which holds
    half of the TVL:
        impact = trade / (reserve + trade) * 100
    Empty pools are reported at the cap.
    """
    if liquidity_usd <= 0:
        return MAX_SLIPPAGE_PERCENT
    reserve = liquidity_usd / 2
    trade = liquidity_usd * trade_fraction
    impact = trade / (reserve + trade) * 100
    return min(impact, MAX_SLIPPAGE_PERCENT)
