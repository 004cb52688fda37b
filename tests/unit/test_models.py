"""Unit tests for data models."""
from __future__ import annotations

from datetime import datetime, timezone

import pytest

from pool_health.models import (
    HealthCheckRecord,
    HealthCheckResult,
    HealthStatus,
    IssueTag,
    PoolMetrics,
    PoolOutcome,
    ProjectHealthReport,
    ScoreBreakdown,
)


@pytest.fixture()
def sample_result() -> HealthCheckResult:
    return HealthCheckResult(
        status=HealthStatus.WARNING,
        scores=ScoreBreakdown(
            liquidity_score=40, slippage_score=80, volume_score=80, overall_score=200 / 3
        ),
        issues=(IssueTag.LOW_LIQUIDITY,),
        recommendations=(
            "Consider increasing LP incentives or emergency liquidity injection",
        ),
    )


class TestPoolMetrics:
    def test_frozen(self, healthy_metrics: PoolMetrics) -> None:
        with pytest.raises(AttributeError):
            healthy_metrics.volume_24h_usd = 0.0  # type: ignore[misc]

    def test_equality(self) -> None:
        a = PoolMetrics(1.0, 2.0, 3.0, 4)
        b = PoolMetrics(1.0, 2.0, 3.0, 4)
        assert a == b


class TestHealthCheckResult:
    def test_defaults(self) -> None:
        r = HealthCheckResult(
            status=HealthStatus.HEALTHY,
            scores=ScoreBreakdown(100, 100, 100, 100.0),
        )
        assert r.issues == ()
        assert r.recommendations == ()

    def test_to_dict_uses_plain_values(self, sample_result: HealthCheckResult) -> None:
        d = sample_result.to_dict()
        assert d["status"] == "WARNING"
        assert d["issues"] == ["Low liquidity depth - risk of high slippage"]
        assert d["liquidity_score"] == 40

    def test_from_dict_restores(self, sample_result: HealthCheckResult) -> None:
        assert HealthCheckResult.from_dict(sample_result.to_dict()) == sample_result


class TestHealthCheckRecord:
    def test_from_dict_restores(self, sample_result: HealthCheckResult) -> None:
        record = HealthCheckRecord(
            project_id="acme",
            pool_id="acme-weth",
            result=sample_result,
            checked_at=datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc),
        )
        assert HealthCheckRecord.from_dict(record.to_dict()) == record


class TestProjectHealthReport:
    def test_counts_and_failures(self, sample_result: HealthCheckResult) -> None:
        report = ProjectHealthReport(
            project_id="acme",
            project_name="ACME",
            outcomes=(
                PoolOutcome(pool_id="a", result=sample_result),
                PoolOutcome(pool_id="b", error="boom"),
            ),
        )
        assert report.count(HealthStatus.WARNING) == 1
        assert report.count(HealthStatus.CRITICAL) == 0
        assert [o.pool_id for o in report.failures] == ["b"]
        assert report.outcomes[0].ok
        assert not report.outcomes[1].ok
