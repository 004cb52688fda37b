"""Unit tests for DexScreener pair parsing — pure functions, no I/O."""
from __future__ import annotations

import pytest

from pool_health.sources.dexscreener.parser import chain_id, extract_pair, parse_pair
from pool_health.sources.slippage import MAX_SLIPPAGE_PERCENT


class TestChainId:
    def test_short_names_mapped(self) -> None:
        assert chain_id("eth") == "ethereum"
        assert chain_id("ETH") == "ethereum"

    def test_known_ids_pass_through(self) -> None:
        assert chain_id("arbitrum") == "arbitrum"
        assert chain_id("base") == "base"

    def test_empty_defaults_to_ethereum(self) -> None:
        assert chain_id("") == "ethereum"


class TestParsePair:
    def test_full_pair(self, sample_dexscreener_response: dict) -> None:
        metrics = parse_pair(sample_dexscreener_response["pairs"][0])
        assert metrics.total_liquidity_usd == pytest.approx(250000.5)
        assert metrics.volume_24h_usd == pytest.approx(48210.75)
        assert metrics.slippage_1_percent == pytest.approx(100 / 51)
        assert metrics.liquidity_provider_count == 0
        assert isinstance(metrics.liquidity_provider_count, int)

    def test_missing_fields_are_zero(self) -> None:
        metrics = parse_pair({"liquidity": None})
        assert metrics.total_liquidity_usd == 0.0
        assert metrics.volume_24h_usd == 0.0
        assert metrics.slippage_1_percent == MAX_SLIPPAGE_PERCENT

    def test_string_values(self) -> None:
        metrics = parse_pair({"liquidity": {"usd": "1000.5"}, "volume": {"h24": "20"}})
        assert metrics.total_liquidity_usd == 1000.5
        assert metrics.volume_24h_usd == 20.0


class TestExtractPair:
    def test_first_pair(self, sample_dexscreener_response: dict) -> None:
        pair = extract_pair(sample_dexscreener_response, "0xabc")
        assert pair["dexId"] == "uniswap"

    def test_single_pair_key(self) -> None:
        assert extract_pair({"pair": {"dexId": "x"}}, "0xabc") == {"dexId": "x"}

    @pytest.mark.parametrize("response", [{}, {"pairs": None}, {"pairs": []}])
    def test_no_pairs_raises(self, response: dict) -> None:
        with pytest.raises(LookupError, match="Pair not found: 0xabc"):
            extract_pair(response, "0xabc")
