"""Discord webhook notification service."""
import logging
import ssl

import aiohttp
import certifi

from ..config import DiscordConfig

logger = logging.getLogger(__name__)

# Discord rejects webhook content longer than this.
MAX_CONTENT_LENGTH = 2000


def split_content(content: str, limit: int = MAX_CONTENT_LENGTH) -> list[str]:
    """Split ``content`` into chunks of at most ``limit`` characters.

    Chunks break on line boundaries; a single line longer than ``limit`` is
    cut into fixed-size pieces.
    """
    chunks: list[str] = []
    current = ""
    for line in content.split("\n"):
        while len(line) > limit:
            if current:
                chunks.append(current)
                current = ""
            chunks.append(line[:limit])
            line = line[limit:]

        candidate = f"{current}\n{line}" if current else line
        if len(candidate) > limit:
            chunks.append(current)
            current = line
        else:
            current = candidate

    if current or not chunks:
        chunks.append(current)
    return chunks


class DiscordNotifier:
    """Post pool alerts and check summaries to a Discord channel webhook."""

    def __init__(self, config: DiscordConfig) -> None:
        self.webhook_url = config.webhook_url
        self.username = config.username

    async def _post(self, content: str, silent: bool = False) -> bool:
        """Post ``content``, split across as many messages as needed."""
        if not self.webhook_url:
            logger.warning("Discord webhook not configured")
            return False

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        async with aiohttp.ClientSession(connector=connector) as session:
            for chunk in split_content(content):
                payload: dict = {"content": chunk, "username": self.username}
                if silent:
                    # SUPPRESS_NOTIFICATIONS
                    payload["flags"] = 1 << 12

                async with session.post(self.webhook_url, json=payload) as response:
                    # Webhooks answer 204 unless ?wait=true is passed.
                    if response.status not in (200, 204):
                        logger.error(
                            "Failed to send Discord message: %s", response.status
                        )
                        return False
        return True

    async def send_alert(self, message: str, subject: str = "") -> bool:
        content = f"**{subject}**\n{message}" if subject else message
        if await self._post(content):
            logger.info("Discord pool alert sent")
            return True
        return False

    async def send_summary(self, message: str, silent: bool = True) -> bool:
        if await self._post(message, silent=silent):
            logger.info("Discord check summary sent")
            return True
        return False
