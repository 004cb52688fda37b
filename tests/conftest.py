"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from pool_health.config import (
    AppConfig,
    EmailConfig,
    MonitorConfig,
    NotificationsConfig,
    PoolConfig,
    ProjectConfig,
    ScoringConfig,
    SourcesConfig,
    StorageConfig,
    TelegramConfig,
    UniswapConfig,
)
from pool_health.models import PoolMetrics


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_pool() -> PoolConfig:
    return PoolConfig(
        id="acme-weth",
        address="0xABCDEF0123456789ABCDEF0123456789ABCDEF01",
        dex="uniswap",
        chain="ethereum",
    )


@pytest.fixture()
def sample_project(sample_pool: PoolConfig) -> ProjectConfig:
    return ProjectConfig(
        id="acme",
        name="ACME Token",
        pools=(
            sample_pool,
            PoolConfig(id="acme-usdc", address="0x2222", dex="uniswap"),
        ),
    )


@pytest.fixture()
def sample_app_config(sample_project: ProjectConfig, tmp_path: Path) -> AppConfig:
    return AppConfig(
        monitor=MonitorConfig(check_interval_minutes=5, max_concurrency=4),
        scoring=ScoringConfig(),
        projects=(sample_project,),
        sources=SourcesConfig(
            uniswap=UniswapConfig(subgraph_url="https://subgraph.example.com", timeout=10)
        ),
        storage=StorageConfig(path=str(tmp_path / "history.db")),
        notifications=NotificationsConfig(
            telegram=TelegramConfig(
                enabled=True,
                alert_bot_token="fake-alert-token",
                summary_bot_token="fake-summary-token",
                chat_id="12345",
            ),
            email=EmailConfig(enabled=False),
        ),
    )


# ---------------------------------------------------------------------------
# Metric fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def healthy_metrics() -> PoolMetrics:
    return PoolMetrics(
        total_liquidity_usd=120_000.0,
        slippage_1_percent=0.5,
        volume_24h_usd=60_000.0,
        liquidity_provider_count=10,
    )


@pytest.fixture()
def critical_metrics() -> PoolMetrics:
    return PoolMetrics(
        total_liquidity_usd=8_000.0,
        slippage_1_percent=12.0,
        volume_24h_usd=2_000.0,
        liquidity_provider_count=2,
    )


@pytest.fixture()
def warning_metrics() -> PoolMetrics:
    return PoolMetrics(
        total_liquidity_usd=30_000.0,
        slippage_1_percent=4.0,
        volume_24h_usd=15_000.0,
        liquidity_provider_count=6,
    )


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    monitor:
      check_interval_minutes: 5
      max_concurrency: 3
    scoring:
      weights: {liquidity: 2, slippage: 1, volume: 1}
      healthy_score: 75
      warning_score: 55
      min_liquidity_providers: 3
    projects:
      - id: acme
        name: ACME Token
        pools:
          - id: acme-weth
            address: "0xPOOL1"
            dex: Uniswap
            chain: ethereum
          - address: "0xPOOL2"
            dex: uniswap
    sources:
      uniswap:
        subgraph_url: "https://subgraph.example.com"
        timeout: 10
    storage:
      path: /tmp/pool-history.db
    notifications:
      telegram:
        enabled: true
        alert_bot_token: "tok1"
        summary_bot_token: "tok2"
        chat_id: 999
      discord:
        enabled: true
        webhook_url: "https://discord.example.com/hook"
      email:
        enabled: false
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


# ---------------------------------------------------------------------------
# Sample subgraph data
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_subgraph_pool() -> dict:
    return {
        "totalValueLockedUSD": "150000.5",
        "liquidityProviderCount": "42",
        "poolDayData": [{"volumeUSD": "30500.25"}],
    }


# ---------------------------------------------------------------------------
# Sample DexScreener data
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_dexscreener_response() -> dict:
    return {
        "schemaVersion": "1.0.0",
        "pairs": [
            {
                "chainId": "ethereum",
                "dexId": "uniswap",
                "pairAddress": "0xABCDEF0123456789ABCDEF0123456789ABCDEF01",
                "priceUsd": "1.02",
                "txns": {"h24": {"buys": 120, "sells": 95}},
                "volume": {"h24": 48210.75},
                "liquidity": {"usd": 250000.5, "base": 120000, "quote": 61.2},
            }
        ],
    }
