"""Liquidity pool health monitor."""
from .alerting import AlertPolicy
from .errors import InvalidMetrics, MissingContext, PoolHealthError, UnsupportedDex
from .evaluator import HealthEvaluator
from .models import (
    Alert,
    AlertSeverity,
    HealthCheckResult,
    HealthStatus,
    IssueTag,
    PoolMetrics,
    ScoreBreakdown,
)

__all__ = [
    "Alert",
    "AlertPolicy",
    "AlertSeverity",
    "HealthCheckResult",
    "HealthEvaluator",
    "HealthStatus",
    "InvalidMetrics",
    "IssueTag",
    "MissingContext",
    "PoolHealthError",
    "PoolMetrics",
    "ScoreBreakdown",
    "UnsupportedDex",
]
