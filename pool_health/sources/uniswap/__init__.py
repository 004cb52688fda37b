"""Uniswap subgraph market data source."""
from .source import UniswapSubgraphSource

__all__ = ["UniswapSubgraphSource"]
