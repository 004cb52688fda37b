"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class HealthStatus(str, Enum):
    HEALTHY = "HEALTHY"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


class AlertSeverity(str, Enum):
    CRITICAL = "CRITICAL"


class IssueTag(str, Enum):
    """Problems detected on a pool, valued by their human-readable text."""

    LOW_LIQUIDITY = "Low liquidity depth - risk of high slippage"
    HIGH_SLIPPAGE = "High slippage impacting trading experience"
    LOW_VOLUME = "Low trading volume indicates poor market interest"
    FEW_PROVIDERS = "Very few liquidity providers - high concentration risk"


@dataclass(frozen=True)
class PoolMetrics:
    """Normalized market metrics for one pool, as consumed by the evaluator."""

    total_liquidity_usd: float
    slippage_1_percent: float
    volume_24h_usd: float
    liquidity_provider_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_liquidity_usd": self.total_liquidity_usd,
            "slippage_1_percent": self.slippage_1_percent,
            "volume_24h_usd": self.volume_24h_usd,
            "liquidity_provider_count": self.liquidity_provider_count,
        }


@dataclass(frozen=True)
class ScoreBreakdown:
    liquidity_score: int
    slippage_score: int
    volume_score: int
    overall_score: float


@dataclass(frozen=True)
class HealthCheckResult:
    """Outcome of evaluating one pool."""

    status: HealthStatus
    scores: ScoreBreakdown
    issues: tuple[IssueTag, ...] = ()
    recommendations: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "liquidity_score": self.scores.liquidity_score,
            "slippage_score": self.scores.slippage_score,
            "volume_score": self.scores.volume_score,
            "overall_score": self.scores.overall_score,
            "issues": [issue.value for issue in self.issues],
            "recommendations": list(self.recommendations),
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> HealthCheckResult:
        return cls(
            status=HealthStatus(raw["status"]),
            scores=ScoreBreakdown(
                liquidity_score=int(raw["liquidity_score"]),
                slippage_score=int(raw["slippage_score"]),
                volume_score=int(raw["volume_score"]),
                overall_score=float(raw["overall_score"]),
            ),
            issues=tuple(IssueTag(i) for i in raw.get("issues", [])),
            recommendations=tuple(raw.get("recommendations", [])),
        )


@dataclass(frozen=True)
class Alert:
    """Critical alert record handed to the store and notification sinks."""

    pool_ref: str
    message: str
    triggered_at: datetime
    severity: AlertSeverity = AlertSeverity.CRITICAL
    alert_type: str = "LIQUIDITY_DROP"
    title: str = "Critical Liquidity Alert"
    project_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "pool_ref": self.pool_ref,
            "message": self.message,
            "triggered_at": self.triggered_at.isoformat(),
            "severity": self.severity.value,
            "alert_type": self.alert_type,
            "title": self.title,
            "project_id": self.project_id,
        }


@dataclass(frozen=True)
class HealthCheckRecord:
    """Immutable history entry for one pool evaluation."""

    project_id: str
    pool_id: str
    result: HealthCheckResult
    checked_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "project_id": self.project_id,
            "pool_id": self.pool_id,
            "checked_at": self.checked_at.isoformat(),
            **self.result.to_dict(),
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> HealthCheckRecord:
        return cls(
            project_id=raw.get("project_id", ""),
            pool_id=raw.get("pool_id", ""),
            result=HealthCheckResult.from_dict(raw),
            checked_at=datetime.fromisoformat(raw["checked_at"]),
        )


@dataclass(frozen=True)
class LiquiditySnapshot:
    """Raw metrics of one check, plus the estimated impact of a 5% trade."""

    pool_id: str
    metrics: PoolMetrics
    recorded_at: datetime
    slippage_5_percent: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "pool_id": self.pool_id,
            "recorded_at": self.recorded_at.isoformat(),
            "slippage_5_percent": self.slippage_5_percent,
            **self.metrics.to_dict(),
        }


@dataclass(frozen=True)
class PoolOutcome:
    """Per-pool entry of a monitoring run: a result or an error, never both."""

    pool_id: str
    result: HealthCheckResult | None = None
    error: str = ""
    alert: Alert | None = None

    @property
    def ok(self) -> bool:
        return self.result is not None


@dataclass(frozen=True)
class ProjectHealthReport:
    project_id: str
    project_name: str
    outcomes: tuple[PoolOutcome, ...] = ()

    @property
    def failures(self) -> tuple[PoolOutcome, ...]:
        return tuple(o for o in self.outcomes if not o.ok)

    def count(self, status: HealthStatus) -> int:
        return sum(
            1 for o in self.outcomes if o.result is not None and o.result.status is status
        )
