"""
Application context built once at startup.

Holds the validated settings, the device serial number and the signed
FoxESS client. It is passed explicitly to the router and the Telegram
adapter; nothing in the bot reads configuration from module globals.

CHANGELOG:
- 2026-10-19: Initial creation (STORY-007)

TODO:
- None
"""

from __future__ import annotations

from dataclasses import dataclass

from foxbot.src.client import FoxESSClient
from foxbot.src.config import BotSettings


@dataclass(frozen=True)
class BotContext:
    """Read-only per-process state shared by every chat interaction."""

    settings: BotSettings
    client: FoxESSClient

    @property
    def device_sn(self) -> str:
        return self.settings.device_sn

    @classmethod
    def from_settings(cls, settings: BotSettings) -> BotContext:
        """Build the context, including a client owning its HTTP pool."""
        client = FoxESSClient(
            base_url=settings.foxess_base_url,
            api_key=settings.foxess_api_key,
            lang=settings.foxess_lang,
        )
        return cls(settings=settings, client=client)

    async def aclose(self) -> None:
        """Release the HTTP connection pool."""
        await self.client.aclose()
