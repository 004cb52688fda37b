"""Alert policy — decides whether a health check result raises an alert."""
from __future__ import annotations

from datetime import datetime, timezone

from .errors import MissingContext
from .models import Alert, HealthCheckResult, HealthStatus


class AlertPolicy:
    """Emit one critical alert per CRITICAL result.

    There is no cooldown: every critical evaluation produces a new alert, and
    WARNING results never alert.
    """

    def maybe_alert(
        self,
        result: HealthCheckResult,
        pool_ref: str | None,
        current_liquidity_usd: float | None,
        *,
        project_id: str = "",
        now: datetime | None = None,
    ) -> Alert | None:
        if not pool_ref:
            raise MissingContext("pool_ref is required to build an alert")
        if current_liquidity_usd is None:
            raise MissingContext("current_liquidity_usd is required to build an alert")

        if result.status is not HealthStatus.CRITICAL:
            return None

        return Alert(
            pool_ref=pool_ref,
            message=f"Pool {pool_ref} liquidity dropped to {current_liquidity_usd:.2f}",
            triggered_at=now or datetime.now(timezone.utc),
            project_id=project_id,
        )
