"""SQLite-backed history store using aiosqlite."""
from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Optional

import aiosqlite

from ..config import StorageConfig
from ..models import Alert, HealthCheckRecord, LiquiditySnapshot

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS health_checks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    project_id TEXT NOT NULL,
    pool_id TEXT NOT NULL,
    checked_at TEXT NOT NULL,
    status TEXT NOT NULL,
    liquidity_score INTEGER NOT NULL,
    slippage_score INTEGER NOT NULL,
    volume_score INTEGER NOT NULL,
    overall_score REAL NOT NULL,
    issues TEXT NOT NULL,
    recommendations TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_health_checks_checked_at
    ON health_checks (checked_at);
CREATE INDEX IF NOT EXISTS idx_health_checks_project
    ON health_checks (project_id, checked_at);

CREATE TABLE IF NOT EXISTS liquidity_data (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    pool_id TEXT NOT NULL,
    recorded_at TEXT NOT NULL,
    total_liquidity_usd REAL NOT NULL,
    volume_24h_usd REAL NOT NULL,
    slippage_1_percent REAL NOT NULL,
    slippage_5_percent REAL NOT NULL,
    liquidity_provider_count INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS alerts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    project_id TEXT NOT NULL,
    pool_ref TEXT NOT NULL,
    alert_type TEXT NOT NULL,
    severity TEXT NOT NULL,
    title TEXT NOT NULL,
    message TEXT NOT NULL,
    triggered_at TEXT NOT NULL
);
"""

_HEALTH_CHECK_COLUMNS = (
    "project_id, pool_id, checked_at, status, liquidity_score, slippage_score, "
    "volume_score, overall_score, issues, recommendations"
)


class SqliteHistoryStore:
    """Insert-only history of health checks, liquidity snapshots and alerts.

    Rows are never updated or deleted; every check adds new rows. The
    connection is opened lazily on first use.
    """

    def __init__(self, config: StorageConfig) -> None:
        self.db_path = Path(config.path)
        self._db: Optional[aiosqlite.Connection] = None
        self._init_lock = asyncio.Lock()

    async def initialize(self) -> None:
        """Open the database and create tables if they do not exist."""
        async with self._init_lock:
            if self._db is not None:
                return
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            db = await aiosqlite.connect(str(self.db_path))
            await db.executescript(_SCHEMA)
            await db.commit()
            self._db = db
            logger.debug("History database ready at %s", self.db_path)

    async def close(self) -> None:
        if self._db is not None:
            await self._db.close()
            self._db = None

    async def _connection(self) -> aiosqlite.Connection:
        if self._db is None:
            await self.initialize()
        assert self._db is not None
        return self._db

    async def append_health_check(self, record: HealthCheckRecord) -> None:
        db = await self._connection()
        result = record.result
        await db.execute(
            f"INSERT INTO health_checks ({_HEALTH_CHECK_COLUMNS}) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                record.project_id,
                record.pool_id,
                record.checked_at.isoformat(),
                result.status.value,
                result.scores.liquidity_score,
                result.scores.slippage_score,
                result.scores.volume_score,
                result.scores.overall_score,
                json.dumps([issue.value for issue in result.issues]),
                json.dumps(list(result.recommendations)),
            ),
        )
        await db.commit()

    async def append_liquidity_snapshot(self, snapshot: LiquiditySnapshot) -> None:
        db = await self._connection()
        metrics = snapshot.metrics
        await db.execute(
            "INSERT INTO liquidity_data (pool_id, recorded_at, total_liquidity_usd, "
            "volume_24h_usd, slippage_1_percent, slippage_5_percent, "
            "liquidity_provider_count) VALUES (?, ?, ?, ?, ?, ?, ?)",
            (
                snapshot.pool_id,
                snapshot.recorded_at.isoformat(),
                metrics.total_liquidity_usd,
                metrics.volume_24h_usd,
                metrics.slippage_1_percent,
                snapshot.slippage_5_percent,
                int(metrics.liquidity_provider_count),
            ),
        )
        await db.commit()

    async def append_alert(self, alert: Alert) -> None:
        db = await self._connection()
        await db.execute(
            "INSERT INTO alerts (project_id, pool_ref, alert_type, severity, title, "
            "message, triggered_at) VALUES (?, ?, ?, ?, ?, ?, ?)",
            (
                alert.project_id,
                alert.pool_ref,
                alert.alert_type,
                alert.severity.value,
                alert.title,
                alert.message,
                alert.triggered_at.isoformat(),
            ),
        )
        await db.commit()

    async def recent_health_checks(
        self, limit: int = 10, project_id: str | None = None
    ) -> list[HealthCheckRecord]:
        """Return up to ``limit`` records, newest first."""
        db = await self._connection()
        if project_id is None:
            query = (
                f"SELECT {_HEALTH_CHECK_COLUMNS} FROM health_checks "
                "ORDER BY checked_at DESC, id DESC LIMIT ?"
            )
            params: tuple[Any, ...] = (limit,)
        else:
            query = (
                f"SELECT {_HEALTH_CHECK_COLUMNS} FROM health_checks "
                "WHERE project_id = ? ORDER BY checked_at DESC, id DESC LIMIT ?"
            )
            params = (project_id, limit)

        async with db.execute(query, params) as cursor:
            rows = await cursor.fetchall()
            description = cursor.description
        return [_row_to_record(row, description) for row in rows]


def _row_to_record(row: Any, description: Any) -> HealthCheckRecord:
    """Convert a health_checks row into a HealthCheckRecord."""
    columns = [d[0] for d in description]
    data = dict(zip(columns, row))
    data["issues"] = json.loads(data["issues"]) if data["issues"] else []
    data["recommendations"] = (
        json.loads(data["recommendations"]) if data["recommendations"] else []
    )
    return HealthCheckRecord.from_dict(data)
