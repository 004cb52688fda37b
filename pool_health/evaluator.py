"""Health evaluator — turns pool metrics into a scored, classified result."""
from __future__ import annotations

import math
from numbers import Integral, Real

from . import scoring
from .config import ScoringConfig
from .errors import InvalidMetrics
from .models import HealthCheckResult, PoolMetrics, ScoreBreakdown

_METRIC_FIELDS = (
    "total_liquidity_usd",
    "slippage_1_percent",
    "volume_24h_usd",
    "liquidity_provider_count",
)


def validate_metrics(metrics: PoolMetrics) -> None:
    """Raise InvalidMetrics unless every field is a finite, non-negative number.

    The provider count must also be a whole number; integral floats such as
    ``6.0`` are accepted.
    """
    for name in _METRIC_FIELDS:
        value = getattr(metrics, name, None)
        if isinstance(value, bool) or not isinstance(value, Real):
            raise InvalidMetrics(name, value)
        if not math.isfinite(value) or value < 0:
            raise InvalidMetrics(name, value)

    count = metrics.liquidity_provider_count
    if not isinstance(count, Integral) and not float(count).is_integer():
        raise InvalidMetrics("liquidity_provider_count", count)


class HealthEvaluator:
    """Stateless evaluator; one instance can be shared across tasks."""

    def __init__(self, config: ScoringConfig | None = None) -> None:
        self._config = config or ScoringConfig()
        self._weights = (
            self._config.liquidity_weight,
            self._config.slippage_weight,
            self._config.volume_weight,
        )

    def evaluate(self, metrics: PoolMetrics) -> HealthCheckResult:
        validate_metrics(metrics)

        liquidity = scoring.liquidity_score(metrics.total_liquidity_usd)
        slippage = scoring.slippage_score(metrics.slippage_1_percent)
        volume = scoring.volume_score(metrics.volume_24h_usd)
        overall = scoring.overall_score((liquidity, slippage, volume), self._weights)

        status = scoring.classify_status(
            overall, self._config.healthy_score, self._config.warning_score
        )
        issues = scoring.identify_issues(
            liquidity,
            slippage,
            volume,
            metrics.liquidity_provider_count,
            self._config.min_liquidity_providers,
        )

        return HealthCheckResult(
            status=status,
            scores=ScoreBreakdown(
                liquidity_score=liquidity,
                slippage_score=slippage,
                volume_score=volume,
                overall_score=overall,
            ),
            issues=issues,
            recommendations=scoring.recommendations_for(issues),
        )
