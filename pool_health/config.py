"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScoringConfig:
    """Tunable parameters of the health evaluator."""

    liquidity_weight: float = 1.0
    slippage_weight: float = 1.0
    volume_weight: float = 1.0
    healthy_score: float = 80.0
    warning_score: float = 60.0
    min_liquidity_providers: int = 5


@dataclass(frozen=True)
class MonitorConfig:
    check_interval_minutes: int = 15
    max_concurrency: int = 8


@dataclass(frozen=True)
class PoolConfig:
    id: str = ""
    address: str = ""
    dex: str = ""
    chain: str = ""


@dataclass(frozen=True)
class ProjectConfig:
    id: str = ""
    name: str = ""
    pools: tuple[PoolConfig, ...] = ()


@dataclass(frozen=True)
class UniswapConfig:
    subgraph_url: str = ""
    timeout: int = 30


@dataclass(frozen=True)
class DexScreenerConfig:
    base_url: str = "https://api.dexscreener.com/latest/dex"
    timeout: int = 30


@dataclass(frozen=True)
class SourcesConfig:
    uniswap: UniswapConfig | None = None
    dexscreener: DexScreenerConfig | None = None


@dataclass(frozen=True)
class StorageConfig:
    path: str = "data/pool_health.db"


@dataclass(frozen=True)
class TelegramConfig:
    enabled: bool = False
    alert_bot_token: str = ""
    summary_bot_token: str = ""
    chat_id: str = ""


@dataclass(frozen=True)
class DiscordConfig:
    enabled: bool = False
    webhook_url: str = ""
    username: str = "Pool Health Monitor"


@dataclass(frozen=True)
class EmailConfig:
    enabled: bool = False
    alert_email: str = ""
    smtp_server: str = "smtp.gmail.com"
    smtp_port: int = 587
    sender_email: str = ""
    sender_password: str = ""


@dataclass(frozen=True)
class NotificationsConfig:
    telegram: TelegramConfig = field(default_factory=TelegramConfig)
    discord: DiscordConfig = field(default_factory=DiscordConfig)
    email: EmailConfig = field(default_factory=EmailConfig)


@dataclass(frozen=True)
class AppConfig:
    monitor: MonitorConfig = field(default_factory=MonitorConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    projects: tuple[ProjectConfig, ...] = ()
    sources: SourcesConfig = field(default_factory=SourcesConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    notifications: NotificationsConfig = field(default_factory=NotificationsConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_monitor(raw: dict[str, Any]) -> MonitorConfig:
    return MonitorConfig(
        check_interval_minutes=int(raw.get("check_interval_minutes", 15)),
        max_concurrency=int(raw.get("max_concurrency", 8)),
    )


def _build_scoring(raw: dict[str, Any]) -> ScoringConfig:
    weights = raw.get("weights", {})
    return ScoringConfig(
        liquidity_weight=float(weights.get("liquidity", 1.0)),
        slippage_weight=float(weights.get("slippage", 1.0)),
        volume_weight=float(weights.get("volume", 1.0)),
        healthy_score=float(raw.get("healthy_score", 80.0)),
        warning_score=float(raw.get("warning_score", 60.0)),
        min_liquidity_providers=int(raw.get("min_liquidity_providers", 5)),
    )


def _build_pools(raw: list[dict[str, Any]]) -> tuple[PoolConfig, ...]:
    pools: list[PoolConfig] = []
    for p in raw:
        address = str(p.get("address", ""))
        pools.append(
            PoolConfig(
                id=str(p.get("id") or address),
                address=address,
                dex=str(p.get("dex", "")).lower(),
                chain=str(p.get("chain", "")),
            )
        )
    return tuple(pools)


def _build_projects(raw: list[dict[str, Any]]) -> tuple[ProjectConfig, ...]:
    projects: list[ProjectConfig] = []
    for p in raw:
        project_id = str(p.get("id", ""))
        projects.append(
            ProjectConfig(
                id=project_id,
                name=str(p.get("name") or project_id),
                pools=_build_pools(p.get("pools", [])),
            )
        )
    return tuple(projects)


def _build_sources(raw: dict[str, Any]) -> SourcesConfig:
    uniswap: UniswapConfig | None = None
    uni = raw.get("uniswap")
    if uni is not None:
        uniswap = UniswapConfig(
            subgraph_url=uni.get("subgraph_url", ""),
            timeout=int(uni.get("timeout", 30)),
        )

    # A bare `dexscreener:` key enables the source with its defaults.
    dexscreener: DexScreenerConfig | None = None
    if "dexscreener" in raw:
        ds = raw.get("dexscreener") or {}
        dexscreener = DexScreenerConfig(
            base_url=ds.get("base_url") or DexScreenerConfig.base_url,
            timeout=int(ds.get("timeout", 30)),
        )

    return SourcesConfig(uniswap=uniswap, dexscreener=dexscreener)


def _build_storage(raw: dict[str, Any]) -> StorageConfig:
    return StorageConfig(path=str(raw.get("path", StorageConfig.path)))


def _build_notifications(raw: dict[str, Any]) -> NotificationsConfig:
    tg = raw.get("telegram", {})
    dc = raw.get("discord", {})
    em = raw.get("email", {})
    return NotificationsConfig(
        telegram=TelegramConfig(
            enabled=bool(tg.get("enabled", False)),
            alert_bot_token=tg.get("alert_bot_token", ""),
            summary_bot_token=tg.get("summary_bot_token", ""),
            chat_id=str(tg.get("chat_id", "")),
        ),
        discord=DiscordConfig(
            enabled=bool(dc.get("enabled", False)),
            webhook_url=dc.get("webhook_url", ""),
            username=dc.get("username", DiscordConfig.username),
        ),
        email=EmailConfig(
            enabled=bool(em.get("enabled", False)),
            alert_email=em.get("alert_email", ""),
            smtp_server=em.get("smtp_server", "smtp.gmail.com"),
            smtp_port=int(em.get("smtp_port", 587)),
            sender_email=em.get("sender_email", ""),
            sender_password=em.get("sender_password", ""),
        ),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def configured_dexes(cfg: AppConfig) -> set[str]:
    """Return the DEX names that have a market data source configured."""
    dexes: set[str] = set()
    if cfg.sources.uniswap is not None:
        dexes.add("uniswap")
    if cfg.sources.dexscreener is not None:
        dexes.add("dexscreener")
    return dexes


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (two levels up from this file).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        monitor=_build_monitor(raw.get("monitor", {})),
        scoring=_build_scoring(raw.get("scoring", {})),
        projects=_build_projects(raw.get("projects", [])),
        sources=_build_sources(raw.get("sources", {})),
        storage=_build_storage(raw.get("storage", {})),
        notifications=_build_notifications(raw.get("notifications", {})),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.projects:
        raise ValueError("At least one project must be configured")

    scoring = cfg.scoring
    weights = (scoring.liquidity_weight, scoring.slippage_weight, scoring.volume_weight)
    if any(w < 0 for w in weights) or sum(weights) <= 0:
        raise ValueError("Scoring weights must be non-negative with a positive sum")
    if scoring.warning_score > scoring.healthy_score:
        raise ValueError("warning_score must not exceed healthy_score")

    if cfg.monitor.max_concurrency < 1:
        raise ValueError("max_concurrency must be at least 1")

    if cfg.sources.uniswap is not None and not cfg.sources.uniswap.subgraph_url:
        raise ValueError("Uniswap source has no subgraph_url")
    if cfg.sources.dexscreener is not None and cfg.sources.dexscreener.timeout <= 0:
        raise ValueError("DexScreener timeout must be positive")

    dexes = configured_dexes(cfg)
    for project in cfg.projects:
        if not project.id:
            raise ValueError(f"Project '{project.name}' has no id")
        for pool in project.pools:
            if not pool.address:
                raise ValueError(
                    f"Pool '{pool.id}' in project '{project.id}' has no address"
                )
            if pool.dex not in dexes:
                raise ValueError(
                    f"Pool '{pool.id}' references unknown dex '{pool.dex}'"
                )
