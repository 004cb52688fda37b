"""Pure parsing functions for DexScreener pair data — no I/O."""
from __future__ import annotations

from typing import Any

from ...models import PoolMetrics
from ..slippage import estimate_slippage

DEFAULT_CHAIN = "ethereum"

# Short chain names used in pool configs → DexScreener chain ids.
CHAIN_IDS = {
    "eth": "ethereum",
    "mainnet": "ethereum",
    "arb": "arbitrum",
    "op": "optimism",
}


def chain_id(chain: str) -> str:
    """Map a configured chain name onto the DexScreener chain id."""
    name = chain.strip().lower()
    if not name:
        return DEFAULT_CHAIN
    return CHAIN_IDS.get(name, name)


def _float(value: Any) -> float:
    return float(value or 0)


def parse_pair(pair: dict[str, Any]) -> PoolMetrics:
    """Normalize a DexScreener ``pair`` object into PoolMetrics.

    DexScreener does not report liquidity providers, so the count is 0.
    """
    tvl = _float((pair.get("liquidity") or {}).get("usd"))
    return PoolMetrics(
        total_liquidity_usd=tvl,
        slippage_1_percent=estimate_slippage(tvl, 0.01),
        volume_24h_usd=_float((pair.get("volume") or {}).get("h24")),
        liquidity_provider_count=0,
    )


def extract_pair(response: dict[str, Any], address: str) -> dict[str, Any]:
    """Pull the first pair out of a ``/pairs/{chain}/{address}`` response.

    Raises:
        LookupError: DexScreener returned no pair for ``address``.
    """
    pairs = response.get("pairs") or []
    if not pairs and response.get("pair"):
        pairs = [response["pair"]]
    if not pairs:
        raise LookupError(f"Pair not found: {address}")
    return pairs[0]
