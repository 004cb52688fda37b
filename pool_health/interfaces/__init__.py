"""Protocol interfaces for the pool health monitor."""
from .history_store import HistoryStore
from .market_data import MarketDataSource
from .notifier import Notifier

__all__ = ["HistoryStore", "MarketDataSource", "Notifier"]
