"""Notifier protocol — delivery channel for pool alerts and check summaries."""
from typing import Protocol


class Notifier(Protocol):
    """Abstract interface for a notification channel.

    ``send_alert`` carries CRITICAL pool alerts and the daily report and
    should always ring. ``send_summary`` carries the per-project summary of
    a check cycle, which is delivered silently when nothing went wrong.
    Both return False when the channel is unconfigured or delivery failed.
    """

    async def send_alert(self, message: str, subject: str = "") -> bool: ...

    async def send_summary(self, message: str, silent: bool = True) -> bool: ...
