"""Per-guild scheduled events for upcoming earnings reports.

Each (guild, symbol) maps to at most one scheduled event, tracked in the
earnings_events table. Events created before that table existed are found by
their exact name and adopted into it.
"""

import asyncio
import sqlite3
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

import discord
import structlog

from bot.formatters import earnings_event_description
from config.constants import EARNINGS_EVENT_SUFFIX, EARNINGS_SYNC_DELAY_SECONDS
from data.manager import DataManager
from data.models import EarningsDate
from storage.repositories.event_repo import EarningsEventRepository
from utils.time_utils import earnings_event_window, within_event_horizon

log = structlog.get_logger(__name__)


class EventOutcome(str, Enum):
    CREATED = "created"
    EXISTS = "exists"
    SKIPPED = "skipped"  # date in the past or beyond the horizon
    FAILED = "failed"  # no earnings data or the API call failed


@dataclass
class SyncResult:
    created: list[tuple[str, date]] = field(default_factory=list)
    already_exists: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


@dataclass
class DeleteResult:
    deleted: list[str] = field(default_factory=list)
    not_found: list[str] = field(default_factory=list)


def event_name(symbol: str) -> str:
    return f"{symbol} {EARNINGS_EVENT_SUFFIX}"


class EarningsEventSync:
    def __init__(
        self,
        repo: EarningsEventRepository,
        data_manager: DataManager,
        delay: float = EARNINGS_SYNC_DELAY_SECONDS,
    ) -> None:
        self.repo = repo
        self.dm = data_manager
        self.delay = delay

    async def find_event(self, guild: Any, symbol: str) -> Any | None:
        """The guild's earnings event for symbol, or None.

        A stored mapping whose event no longer exists is dropped.
        """
        record = self.repo.get(guild.id, symbol)
        if record is not None:
            try:
                return await guild.fetch_scheduled_event(record.event_id)
            except discord.NotFound:
                log.info("earnings_event_mapping_stale", guild_id=guild.id, symbol=symbol,
                         event_id=record.event_id)
                self.repo.delete(guild.id, symbol)

        name = event_name(symbol)
        for event in await guild.fetch_scheduled_events():
            if event.name == name:
                self.repo.save(guild.id, symbol, event.id, event.start_time)
                log.info("earnings_event_adopted", guild_id=guild.id, symbol=symbol, event_id=event.id)
                return event
        return None

    async def create_event(self, guild: Any, estimate: EarningsDate) -> Any | None:
        """Create the event unless its start is outside the allowed window."""
        start, end = earnings_event_window(estimate.report_date)
        if not within_event_horizon(start):
            log.info("earnings_event_out_of_window", guild_id=guild.id, symbol=estimate.symbol,
                     start=start.isoformat())
            return None

        event = await guild.create_scheduled_event(
            name=event_name(estimate.symbol),
            description=earnings_event_description(estimate),
            start_time=start,
            end_time=end,
            location=f"https://finance.yahoo.com/quote/{estimate.symbol}",
            privacy_level=discord.ScheduledEventPrivacyLevel.guild_only,
        )
        self.repo.save(guild.id, estimate.symbol, event.id, start)
        log.info("earnings_event_created", guild_id=guild.id, symbol=estimate.symbol,
                 event_id=event.id, start=start.isoformat())
        return event

    async def ensure_event(self, guild: Any, symbol: str) -> tuple[EventOutcome, EarningsDate | None]:
        """Make sure symbol has an earnings event in guild. Never raises."""
        try:
            if await self.find_event(guild, symbol) is not None:
                return EventOutcome.EXISTS, None

            estimate = await self.dm.get_earnings_date(symbol)
            if estimate is None:
                return EventOutcome.FAILED, None

            event = await self.create_event(guild, estimate)
            if event is None:
                return EventOutcome.SKIPPED, estimate
            return EventOutcome.CREATED, estimate
        except discord.HTTPException as e:
            log.error("earnings_event_ensure_failed", guild_id=guild.id, symbol=symbol, error=str(e))
            return EventOutcome.FAILED, None
        except sqlite3.Error as e:
            log.error("earnings_event_mapping_failed", guild_id=guild.id, symbol=symbol, error=str(e))
            return EventOutcome.FAILED, None

    async def delete_event(self, guild: Any, symbol: str) -> bool:
        """Delete symbol's earnings event in guild. False if there was none."""
        try:
            event = await self.find_event(guild, symbol)
            if event is None:
                return False
            await event.delete()
        except discord.HTTPException as e:
            log.error("earnings_event_delete_failed", guild_id=guild.id, symbol=symbol, error=str(e))
            return False

        self.repo.delete(guild.id, symbol)
        log.info("earnings_event_deleted", guild_id=guild.id, symbol=symbol)
        return True

    async def delete_events(self, guild: Any, symbols: list[str]) -> DeleteResult:
        result = DeleteResult()
        for symbol in symbols:
            if await self.delete_event(guild, symbol):
                result.deleted.append(symbol)
            else:
                result.not_found.append(symbol)
        return result

    async def sync_guild(self, guild: Any, symbols: list[str]) -> SyncResult:
        """Ensure an event for every symbol, one at a time with a short pause between."""
        log.info("earnings_sync_started", guild_id=guild.id, symbols=len(symbols))
        result = SyncResult()

        for i, symbol in enumerate(symbols):
            if i and self.delay:
                await asyncio.sleep(self.delay)

            outcome, estimate = await self.ensure_event(guild, symbol)
            if outcome is EventOutcome.CREATED and estimate is not None:
                result.created.append((symbol, estimate.report_date))
            elif outcome is EventOutcome.EXISTS:
                result.already_exists.append(symbol)
            elif outcome is EventOutcome.SKIPPED:
                result.skipped.append(symbol)
            else:
                result.failed.append(symbol)

        log.info(
            "earnings_sync_complete",
            guild_id=guild.id,
            created=len(result.created),
            already_exists=len(result.already_exists),
            skipped=len(result.skipped),
            failed=len(result.failed),
        )
        return result
