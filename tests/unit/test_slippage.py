"""Unit tests for the constant-product price impact estimate."""
from __future__ import annotations

import pytest

from pool_health.sources.slippage import MAX_SLIPPAGE_PERCENT, estimate_slippage


class TestEstimateSlippage:
    def test_one_percent_trade(self) -> None:
        # 1% of TVL against a reserve holding half the TVL: 0.01 / 0.51.
        assert estimate_slippage(100_000.0, 0.01) == pytest.approx(100 / 51)

    def test_five_percent_trade(self) -> None:
        assert estimate_slippage(100_000.0, 0.05) == pytest.approx(500 / 55)

    def test_independent_of_pool_size(self) -> None:
        assert estimate_slippage(1_000.0, 0.01) == pytest.approx(
            estimate_slippage(1_000_000.0, 0.01)
        )

    def test_larger_trade_more_impact(self) -> None:
        assert estimate_slippage(50_000.0, 0.05) > estimate_slippage(50_000.0, 0.01)

    def test_capped(self) -> None:
        assert estimate_slippage(50_000.0, 10.0) == MAX_SLIPPAGE_PERCENT

    def test_empty_pool_at_cap(self) -> None:
        assert estimate_slippage(0.0, 0.01) == MAX_SLIPPAGE_PERCENT
