"""Market data sources."""
from .dexscreener import DexScreenerSource
from .uniswap import UniswapSubgraphSource

__all__ = ["DexScreenerSource", "UniswapSubgraphSource"]
