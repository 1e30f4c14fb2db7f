"""Discord bot client with service references."""

from typing import TYPE_CHECKING

import discord
import structlog

from bot.formatters import GREETING
from config.settings import settings

if TYPE_CHECKING:
    from ai.conversation import ConversationStore
    from ai.engine import ChatEngine
    from data.manager import DataManager
    from scheduler.earnings_sync import EarningsEventSync
    from scheduler.scheduler import ActivityTracker, Scheduler
    from storage.database import Database

log = structlog.get_logger(__name__)


class StoinkBot(discord.Bot):
    """Main Discord bot class with references to all services."""

    def __init__(self) -> None:
        intents = discord.Intents.default()
        intents.message_content = True
        intents.scheduled_events = True

        super().__init__(
            intents=intents,
            activity=discord.Activity(
                type=discord.ActivityType.watching,
                name="the tickers 📈",
            ),
        )

        # Service references (set during startup in main.py)
        self.db: Database | None = None
        self.data_manager: DataManager | None = None
        self.conversation_store: ConversationStore | None = None
        self.chat_engine: ChatEngine | None = None
        self.earnings_sync: EarningsEventSync | None = None
        self.activity_tracker: ActivityTracker | None = None
        self.scheduler: Scheduler | None = None

    async def send_greeting(self) -> None:
        """Announce startup in the chat channel."""
        channel_id = settings.chat_channel_id
        if not channel_id or not settings.send_greeting:
            return

        try:
            channel = self.get_channel(channel_id) or await self.fetch_channel(channel_id)
            await channel.trigger_typing()
            await channel.send(GREETING)
            log.info("greeting_sent", channel_id=channel_id)
        except discord.HTTPException as e:
            log.error("greeting_failed", channel_id=channel_id, error=str(e))
