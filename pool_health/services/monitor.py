"""Health monitoring orchestration — iterates projects x pools."""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable

from ..alerting import AlertPolicy
from ..config import AppConfig, PoolConfig, ProjectConfig
from ..errors import InvalidMetrics, MissingContext, UnsupportedDex
from ..evaluator import HealthEvaluator
from ..interfaces.history_store import HistoryStore
from ..interfaces.market_data import MarketDataSource
from ..interfaces.notifier import Notifier
from ..models import (
    Alert,
    HealthCheckRecord,
    HealthCheckResult,
    HealthStatus,
    LiquiditySnapshot,
    PoolMetrics,
    PoolOutcome,
    ProjectHealthReport,
)
from ..notifications import DiscordNotifier, EmailNotifier, TelegramNotifier
from ..sources import DexScreenerSource, UniswapSubgraphSource
from ..sources.slippage import estimate_slippage
from ..storage import SqliteHistoryStore

logger = logging.getLogger(__name__)

# Registry of market data source factories keyed by DEX name.
_SOURCE_FACTORIES: dict[str, Any] = {
    "uniswap": lambda sources: (
        UniswapSubgraphSource(sources.uniswap) if sources.uniswap else None
    ),
    "dexscreener": lambda sources: (
        DexScreenerSource(sources.dexscreener) if sources.dexscreener else None
    ),
}

_STATUS_LABELS = {
    HealthStatus.HEALTHY: "✅ Healthy",
    HealthStatus.WARNING: "⚠️ WARNING",
    HealthStatus.CRITICAL: "🚨 CRITICAL",
}


class HealthMonitor:
    """Orchestrates pool health checks, persistence and alerting across projects."""

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self._evaluator = HealthEvaluator(config.scoring)
        self._policy = AlertPolicy()

        # Build market data sources
        self._sources: dict[str, MarketDataSource] = {}
        for dex, factory in _SOURCE_FACTORIES.items():
            source = factory(config.sources)
            if source is not None:
                self._sources[dex] = source

        self._store: HistoryStore = SqliteHistoryStore(config.storage)

        # Build notifiers
        notifications = config.notifications
        self._notifiers: list[Notifier] = []
        if notifications.telegram.enabled:
            self._notifiers.append(TelegramNotifier(notifications.telegram))
        if notifications.discord.enabled:
            self._notifiers.append(DiscordNotifier(notifications.discord))
        if notifications.email.enabled:
            self._notifiers.append(EmailNotifier(notifications.email))

    # ------------------------------------------------------------------
    # Formatting helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _format_address(address: str) -> str:
        if len(address) > 16:
            return f"{address[:10]}...{address[-6:]}"
        return address

    @staticmethod
    def _status_label(status: HealthStatus) -> str:
        return _STATUS_LABELS[status]

    @staticmethod
    def _now_str() -> str:
        return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")

    @staticmethod
    def _bullets(lines: tuple[str, ...]) -> str:
        return "\n".join(f"  • {line}" for line in lines) if lines else "  —"

    @staticmethod
    def _score_line(result: HealthCheckResult) -> str:
        s = result.scores
        return (
            f"Liquidity {s.liquidity_score} · Slippage {s.slippage_score} · "
            f"Volume {s.volume_score} · Overall {s.overall_score:.1f}"
        )

    def _build_critical_alert(
        self,
        project: ProjectConfig,
        pool: PoolConfig,
        metrics: PoolMetrics,
        result: HealthCheckResult,
        alert: Alert,
    ) -> str:
        chain = f" · {pool.chain.upper()}" if pool.chain else ""
        return (
            f"🚨 {alert.title}\n"
            f"\n"
            f"{project.name} · {pool.id} · {pool.dex}{chain}\n"
            f"\n"
            f"{alert.message}\n"
            f"\n"
            f"TVL: ${metrics.total_liquidity_usd:,.2f}\n"
            f"Volume 24h: ${metrics.volume_24h_usd:,.2f}\n"
            f"Slippage (1% trade): {metrics.slippage_1_percent:.2f}%\n"
            f"LPs: {metrics.liquidity_provider_count}\n"
            f"\n"
            f"Scores: {self._score_line(result)}\n"
            f"\n"
            f"Issues:\n{self._bullets(tuple(i.value for i in result.issues))}\n"
            f"\n"
            f"Recommendations:\n{self._bullets(result.recommendations)}\n"
            f"\n"
            f"Pool: {self._format_address(pool.address)}\n"
            f"{self._now_str()} UTC"
        )

    def _build_project_summary(self, report: ProjectHealthReport) -> str:
        lines: list[str] = []
        for outcome in report.outcomes:
            if outcome.result is not None:
                lines.append(
                    f"{self._status_label(outcome.result.status)} · {outcome.pool_id}"
                    f" · score {outcome.result.scores.overall_score:.1f}"
                )
            else:
                lines.append(f"❌ {outcome.pool_id} · {outcome.error}")

        body = "\n".join(lines) if lines else "No pools configured."
        return (
            f"📊 {report.project_name}\n"
            f"\n"
            f"Healthy: {report.count(HealthStatus.HEALTHY)} · "
            f"Warning: {report.count(HealthStatus.WARNING)} · "
            f"Critical: {report.count(HealthStatus.CRITICAL)} · "
            f"Failed: {len(report.failures)}\n"
            f"\n"
            f"{body}\n"
            f"\n"
            f"{self._now_str()} UTC"
        )

    # ------------------------------------------------------------------
    # Notification dispatch
    # ------------------------------------------------------------------

    async def _send_summary(self, message: str, silent: bool = False) -> None:
        for notifier in self._notifiers:
            try:
                await notifier.send_summary(message, silent=silent)
            except Exception as e:
                logger.error("Notifier send_summary failed: %s", e)

    async def _send_alert(self, message: str, subject: str = "") -> None:
        for notifier in self._notifiers:
            try:
                await notifier.send_alert(message, subject=subject)
            except Exception as e:
                logger.error("Notifier send_alert failed: %s", e)

    # ------------------------------------------------------------------
    # Per-pool steps
    # ------------------------------------------------------------------

    async def _fetch_and_evaluate(
        self, pool: PoolConfig
    ) -> tuple[PoolMetrics, HealthCheckResult]:
        source = self._sources.get(pool.dex)
        if source is None:
            raise UnsupportedDex(f"Unsupported DEX: {pool.dex}")

        metrics = await source.fetch_metrics(pool)
        return metrics, self._evaluator.evaluate(metrics)

    async def _raise_alert(
        self,
        project: ProjectConfig,
        pool: PoolConfig,
        metrics: PoolMetrics,
        result: HealthCheckResult,
    ) -> Alert | None:
        """Build, store and dispatch a critical alert; failures are logged only."""
        try:
            alert = self._policy.maybe_alert(
                result,
                pool.address,
                metrics.total_liquidity_usd,
                project_id=project.id,
            )
        except MissingContext as e:
            logger.error("Cannot build alert for pool %s: %s", pool.id, e)
            return None

        if alert is None:
            return None

        logger.warning("CRITICAL — %s", alert.message)

        try:
            await self._store.append_alert(alert)
        except Exception as e:
            logger.error("Failed to store alert for pool %s: %s", pool.id, e)

        await self._send_alert(
            self._build_critical_alert(project, pool, metrics, result, alert),
            subject="🚨 CRITICAL: Pool Liquidity Alert",
        )
        return alert

    async def _check_pool(self, project: ProjectConfig, pool: PoolConfig) -> PoolOutcome:
        try:
            metrics, result = await self._fetch_and_evaluate(pool)

            checked_at = datetime.now(timezone.utc)
            await self._store.append_health_check(
                HealthCheckRecord(
                    project_id=project.id,
                    pool_id=pool.id,
                    result=result,
                    checked_at=checked_at,
                )
            )
            await self._store.append_liquidity_snapshot(
                LiquiditySnapshot(
                    pool_id=pool.id,
                    metrics=metrics,
                    recorded_at=checked_at,
                    slippage_5_percent=estimate_slippage(
                        metrics.total_liquidity_usd, 0.05
                    ),
                )
            )
        except InvalidMetrics as e:
            logger.error("Skipping pool %s this cycle: %s", pool.id, e)
            return PoolOutcome(pool_id=pool.id, error=str(e))
        except Exception as e:
            logger.error("Health check failed for pool %s: %s", pool.id, e)
            return PoolOutcome(pool_id=pool.id, error=str(e) or type(e).__name__)

        logger.info(
            "Pool %s · %s · %s  Scores L/S/V: %d/%d/%d  Overall: %.1f  Issues: %d",
            project.id,
            pool.id,
            result.status.value,
            result.scores.liquidity_score,
            result.scores.slippage_score,
            result.scores.volume_score,
            result.scores.overall_score,
            len(result.issues),
        )

        alert = await self._raise_alert(project, pool, metrics, result)
        return PoolOutcome(pool_id=pool.id, result=result, alert=alert)

    # ------------------------------------------------------------------
    # Core workflows
    # ------------------------------------------------------------------

    async def _gather_bounded(
        self,
        func: Callable[[PoolConfig], Awaitable[Any]],
        pools: tuple[PoolConfig, ...],
        return_exceptions: bool = False,
    ) -> list[Any]:
        """Run ``func`` over ``pools`` with at most ``max_concurrency`` in flight.

        Results keep the order of ``pools``.
        """
        semaphore = asyncio.Semaphore(self._config.monitor.max_concurrency)

        async def _bounded(pool: PoolConfig) -> Any:
            async with semaphore:
                return await func(pool)

        return await asyncio.gather(
            *(_bounded(pool) for pool in pools),
            return_exceptions=return_exceptions,
        )

    async def check_project(self, project: ProjectConfig) -> ProjectHealthReport:
        """Evaluate every pool of a project concurrently."""
        outcomes = await self._gather_bounded(
            lambda pool: self._check_pool(project, pool), project.pools
        )
        return ProjectHealthReport(
            project_id=project.id,
            project_name=project.name,
            outcomes=tuple(outcomes),
        )

    async def check_and_alert(self) -> list[ProjectHealthReport]:
        """Check all project pools, persist results and send alerts when needed."""
        reports: list[ProjectHealthReport] = []

        for project in self._config.projects:
            report = await self.check_project(project)
            reports.append(report)

            if report.failures:
                logger.warning(
                    "Project %s: %d of %d pool checks failed",
                    project.id,
                    len(report.failures),
                    len(report.outcomes),
                )

            quiet = not report.failures and report.count(HealthStatus.CRITICAL) == 0
            await self._send_summary(self._build_project_summary(report), silent=quiet)

        return reports

    async def generate_daily_report(self) -> str:
        """Evaluate every pool without persisting and send a grouped report."""
        sections: list[str] = []

        for project in self._config.projects:
            results = await self._gather_bounded(
                self._fetch_and_evaluate, project.pools, return_exceptions=True
            )

            pool_lines: list[str] = []
            for pool, outcome in zip(project.pools, results):
                if isinstance(outcome, BaseException):
                    logger.error("Report: pool %s failed: %s", pool.id, outcome)
                    reason = str(outcome) or type(outcome).__name__
                    pool_lines.append(f"{pool.id} · ❌ {reason}")
                    continue

                metrics, result = outcome
                pool_lines.append(
                    f"{pool.id} · {self._status_label(result.status)}\n"
                    f"  TVL: ${metrics.total_liquidity_usd:,.2f} · "
                    f"Volume 24h: ${metrics.volume_24h_usd:,.2f}\n"
                    f"  {self._score_line(result)}"
                )

            if pool_lines:
                header = f"━━ {project.name} ━━"
                sections.append(header + "\n\n" + "\n\n".join(pool_lines))

        body = "\n\n".join(sections) if sections else "No pools configured."

        report = (
            f"📋 Daily Pool Health Report\n"
            f"\n"
            f"{body}\n"
            f"\n"
            f"{self._now_str()} UTC"
        )

        await self._send_alert(report, subject="📋 Daily Pool Health Report")
        logger.info("Daily report sent")
        return report

    async def recent_history(
        self, limit: int = 10, project_id: str | None = None
    ) -> list[HealthCheckRecord]:
        return await self._store.recent_health_checks(limit=limit, project_id=project_id)

    async def close(self) -> None:
        """Release the history store connection."""
        await self._store.close()

    async def run_continuous(self, check_interval_minutes: int | None = None) -> None:
        """Run continuous monitoring loop."""
        interval = check_interval_minutes or self._config.monitor.check_interval_minutes
        logger.info(
            "Starting continuous monitoring (checking every %d minutes)", interval
        )

        while True:
            try:
                await self.check_and_alert()
                await asyncio.sleep(interval * 60)
            except Exception as e:
                logger.error("Error in monitoring loop: %s", e)
                await asyncio.sleep(60)
