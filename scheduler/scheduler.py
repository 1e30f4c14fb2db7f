"""Periodic housekeeping using discord.ext.tasks: conversation sweep and idle shutdown."""

import time
from collections.abc import Callable
from typing import Any

import structlog
from discord.ext import tasks

from ai.conversation import ConversationStore
from config.constants import CONVERSATION_SWEEP_SECONDS, IDLE_CHECK_SECONDS
from scheduler.earnings_sync import SyncResult
from storage.repositories.watchlist_repo import WatchlistRepository

log = structlog.get_logger(__name__)


class ActivityTracker:
    """Process-wide last-activity clock, reset by every inbound channel message."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self.last_activity = clock()

    def touch(self) -> None:
        self.last_activity = self._clock()

    def idle_seconds(self) -> float:
        return self._clock() - self.last_activity


class Scheduler:
    """Owns the background loops. The bot is closed once idle too long."""

    def __init__(
        self,
        bot: Any,
        store: ConversationStore,
        activity: ActivityTracker,
        idle_timeout_minutes: int,
    ) -> None:
        self.bot = bot
        self.store = store
        self.activity = activity
        self.idle_timeout_seconds = idle_timeout_minutes * 60

    def start(self) -> None:
        """Start all scheduled tasks."""
        self._sweep_conversations.start()
        self._check_idle.start()
        log.info("scheduler_all_tasks_started")

    def stop(self) -> None:
        """Stop all scheduled tasks."""
        for task in [self._sweep_conversations, self._check_idle]:
            if task.is_running():
                task.cancel()

    def sweep_conversations(self) -> int:
        return self.store.sweep()

    async def check_idle(self) -> bool:
        """Close the bot if nothing arrived within the timeout. Returns True if it did."""
        idle = self.activity.idle_seconds()
        if idle <= self.idle_timeout_seconds:
            return False
        log.info("idle_shutdown", idle_seconds=round(idle))
        await self.bot.close()
        return True

    async def sync_earnings_events(self) -> dict[int, SyncResult]:
        """Create missing earnings events for every watched symbol in every guild."""
        symbols = WatchlistRepository(self.bot.db).get_all_symbols()
        if not symbols:
            log.info("earnings_sync_no_symbols")
            return {}

        results = {}
        for guild in self.bot.guilds:
            results[guild.id] = await self.bot.earnings_sync.sync_guild(guild, symbols)
        return results

    @tasks.loop(seconds=CONVERSATION_SWEEP_SECONDS)
    async def _sweep_conversations(self) -> None:
        self.sweep_conversations()

    @tasks.loop(seconds=IDLE_CHECK_SECONDS)
    async def _check_idle(self) -> None:
        await self.check_idle()

    @_sweep_conversations.before_loop
    async def _before_sweep(self) -> None:
        await self.bot.wait_until_ready()

    @_check_idle.before_loop
    async def _before_check_idle(self) -> None:
        await self.bot.wait_until_ready()
