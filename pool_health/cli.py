"""Command-line interface for the pool health monitor."""
from __future__ import annotations

import argparse
import asyncio
import sys

from .config import load_config
from .logging_setup import configure_logging
from .models import HealthCheckRecord
from .services import HealthMonitor


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="pool-health-monitor",
        description="Liquidity pool health monitor",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("check", help="Single health check of every pool with alerts")
    sub.add_parser("report", help="Generate daily pool health report")

    monitor_parser = sub.add_parser("monitor", help="Continuous monitoring loop")
    monitor_parser.add_argument(
        "interval",
        nargs="?",
        type=int,
        default=None,
        help="Check interval in minutes (overrides config)",
    )

    history_parser = sub.add_parser("history", help="Show recent health checks")
    history_parser.add_argument(
        "--limit", type=int, default=10, help="Number of records (default: 10)"
    )
    history_parser.add_argument(
        "--project", default=None, help="Only show checks for this project id"
    )

    return parser


def format_history_line(record: HealthCheckRecord) -> str:
    result = record.result
    return (
        f"{record.checked_at:%Y-%m-%d %H:%M:%S}  {record.project_id:<12} "
        f"{record.pool_id:<20} {result.status.value:<8} "
        f"{result.scores.overall_score:6.1f}  issues={len(result.issues)}"
    )


async def _run(args: argparse.Namespace) -> int:
    """Execute the selected command; returns the process exit code."""
    configure_logging(args.log_level)
    config = load_config(args.config)
    monitor = HealthMonitor(config)
    try:
        return await _dispatch(args, monitor)
    finally:
        await monitor.close()


async def _dispatch(args: argparse.Namespace, monitor: HealthMonitor) -> int:
    if args.command == "check":
        reports = await monitor.check_and_alert()
        return 1 if any(r.failures for r in reports) else 0
    if args.command == "report":
        await monitor.generate_daily_report()
    elif args.command == "monitor":
        await monitor.run_continuous(args.interval)
    elif args.command == "history":
        records = await monitor.recent_history(args.limit, args.project)
        if not records:
            print("No health checks recorded.")
        for record in records:
            print(format_history_line(record))
    else:
        build_parser().print_help()
        return 1
    return 0


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(asyncio.run(_run(args)))
