"""DexScreener pair market data source."""
from .source import DexScreenerSource

__all__ = ["DexScreenerSource"]
