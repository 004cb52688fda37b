"""History store protocol — insert-only persistence of monitoring output."""
from typing import Protocol

from ..models import Alert, HealthCheckRecord, LiquiditySnapshot


class HistoryStore(Protocol):
    """Abstract interface for persisting health checks, snapshots and alerts.

    Records are only ever added; nothing written by an earlier check is
    modified.
    """

    async def append_health_check(self, record: HealthCheckRecord) -> None: ...

    async def append_liquidity_snapshot(self, snapshot: LiquiditySnapshot) -> None: ...

    async def append_alert(self, alert: Alert) -> None: ...

    async def recent_health_checks(
        self, limit: int = 10, project_id: str | None = None
    ) -> list[HealthCheckRecord]: ...

    async def close(self) -> None: ...
