"""Exception types raised by the health engine and its orchestrator."""
from __future__ import annotations


class PoolHealthError(Exception):
    """Base class for pool health errors."""


class InvalidMetrics(PoolHealthError, ValueError):
    """Pool metrics are missing, non-numeric, negative or non-finite."""

    def __init__(self, field_name: str, value: object) -> None:
        super().__init__(f"Invalid value for {field_name}: {value!r}")
        self.field_name = field_name
        self.value = value


class MissingContext(PoolHealthError, ValueError):
    """Alert policy was invoked without the pool context it needs."""


class UnsupportedDex(PoolHealthError, LookupError):
    """No market data source is configured for a pool's DEX."""
