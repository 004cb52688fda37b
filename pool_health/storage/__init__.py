"""History storage backends."""
from .sqlite import SqliteHistoryStore

__all__ = ["SqliteHistoryStore"]
