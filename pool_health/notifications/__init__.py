"""Notification modules."""
from .discord import DiscordNotifier
from .email import EmailNotifier
from .telegram import TelegramNotifier

__all__ = ["DiscordNotifier", "EmailNotifier", "TelegramNotifier"]
