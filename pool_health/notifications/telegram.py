"""Telegram notification service."""
import html
import logging
import ssl

import aiohttp
import certifi

from ..config import TelegramConfig

logger = logging.getLogger(__name__)


class TelegramNotifier:
    """Send pool alerts and check summaries via Telegram bots.

    Alerts go through the alert bot so they ring. Check summaries go through
    the summary bot, or the alert bot when no summary bot is configured.
    """

    def __init__(self, config: TelegramConfig) -> None:
        self.alert_bot_token = config.alert_bot_token
        self.summary_bot_token = config.summary_bot_token or config.alert_bot_token
        self.chat_id = config.chat_id

    async def _send_message(self, text: str, bot_token: str, silent: bool = False) -> bool:
        """Send pre-rendered HTML text."""
        if not bot_token or not self.chat_id:
            logger.warning("Telegram credentials not configured")
            return False

        url = f"https://api.telegram.org/bot{bot_token}/sendMessage"
        payload = {
            "chat_id": self.chat_id,
            "text": text,
            "parse_mode": "HTML",
            "disable_notification": silent,
            "disable_web_page_preview": True,
        }

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        async with aiohttp.ClientSession(connector=connector) as session:
            async with session.post(url, json=payload) as response:
                if response.status == 200:
                    return True
                logger.error("Failed to send Telegram message: %s", response.status)
                return False

    async def send_alert(self, message: str, subject: str = "") -> bool:
        # Pool names and issue text are plain text; only the subject is markup.
        text = html.escape(message, quote=False)
        if subject:
            text = f"<b>{html.escape(subject, quote=False)}</b>\n\n{text}"
        if await self._send_message(text, self.alert_bot_token, silent=False):
            logger.info("Telegram pool alert sent")
            return True
        return False

    async def send_summary(self, message: str, silent: bool = True) -> bool:
        text = html.escape(message, quote=False)
        if await self._send_message(text, self.summary_bot_token, silent=silent):
            logger.info("Telegram check summary sent")
            return True
        return False
