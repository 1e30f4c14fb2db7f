"""`/watch` subcommands: per-user watchlist plus the guild's earnings events."""

import sqlite3
from typing import Any

import structlog

from bot.formatters import WATCH_HELP, format_watchlist, invalid_symbol
from bot.handlers.common import send_reply
from bot.typing_indicator import keep_typing
from scheduler.earnings_sync import EventOutcome
from storage.repositories.watchlist_repo import WatchlistRepository
from utils.formatting import validate_ticker
from utils.time_utils import short_date

log = structlog.get_logger(__name__)


class WatchHandler:
    def __init__(self, bot: Any) -> None:
        self.bot = bot

    @property
    def repo(self) -> WatchlistRepository:
        return WatchlistRepository(self.bot.db)

    async def handle(self, message: Any, args: list[str]) -> None:
        subcommand = args[0].lower() if args else ""
        raw_symbol = args[1] if len(args) > 1 else None

        if subcommand == "add":
            await self.add(message, raw_symbol)
        elif subcommand == "remove":
            await self.remove(message, raw_symbol)
        elif subcommand == "list":
            await self.show(message)
        elif subcommand == "clear":
            await self.clear(message)
        else:
            await send_reply(message, WATCH_HELP)

    async def add(self, message: Any, raw_symbol: str | None) -> None:
        symbol = validate_ticker(raw_symbol)
        if not symbol:
            await send_reply(message, invalid_symbol("/watch add AAPL"))
            return

        try:
            async with keep_typing(message.channel):
                quote = await self.bot.data_manager.get_quote(symbol)
                if quote is None:
                    reply = f'❌ Couldn\'t find ticker "{symbol}". Please check the symbol and try again.'
                elif not self.repo.add(message.author.id, symbol):
                    reply = f"⚠️ **{symbol}** is already in your watchlist."
                else:
                    reply = f"✅ Added **{symbol}** ({quote.name}) to your watchlist!"
                    if message.guild is not None:
                        outcome, estimate = await self.bot.earnings_sync.ensure_event(message.guild, symbol)
                        if outcome is EventOutcome.CREATED and estimate is not None:
                            reply += f"\n📅 Created earnings event for {short_date(estimate.report_date)}!"
        except sqlite3.Error as e:
            log.error("watchlist_add_failed", user_id=message.author.id, symbol=symbol, error=str(e))
            reply = "❌ An error occurred while adding to your watchlist."

        await send_reply(message, reply)

    async def remove(self, message: Any, raw_symbol: str | None) -> None:
        symbol = validate_ticker(raw_symbol)
        if not symbol:
            await send_reply(message, invalid_symbol("/watch remove AAPL"))
            return

        try:
            async with keep_typing(message.channel):
                if not self.repo.remove(message.author.id, symbol):
                    reply = f"⚠️ **{symbol}** is not in your watchlist."
                else:
                    reply = f"✅ Removed **{symbol}** from your watchlist."
                    # Last watcher gone: the event has no audience left
                    if message.guild is not None and self.repo.count_watchers(symbol) == 0:
                        if await self.bot.earnings_sync.delete_event(message.guild, symbol):
                            reply += f"\n🗑️ Deleted earnings event for **{symbol}**."
        except sqlite3.Error as e:
            log.error("watchlist_remove_failed", user_id=message.author.id, symbol=symbol, error=str(e))
            reply = "❌ An error occurred while removing from your watchlist."

        await send_reply(message, reply)

    async def show(self, message: Any) -> None:
        try:
            symbols = self.repo.get(message.author.id)
        except sqlite3.Error as e:
            log.error("watchlist_list_failed", user_id=message.author.id, error=str(e))
            await send_reply(message, "❌ An error occurred while fetching your watchlist.")
            return

        if not symbols:
            await send_reply(message, "📋 Your watchlist is empty. Use `/watch add SYMBOL` to add stocks!")
            return

        async with keep_typing(message.channel):
            quotes = await self.bot.data_manager.get_quotes(symbols)

        await send_reply(message, format_watchlist(symbols, quotes))

    async def clear(self, message: Any) -> None:
        try:
            async with keep_typing(message.channel):
                removed = self.repo.clear(message.author.id)
                if not removed:
                    reply = "📋 Your watchlist is already empty."
                else:
                    plural = "s" if len(removed) > 1 else ""
                    reply = f"✅ Cleared your watchlist (removed {len(removed)} stock{plural})."
                    if message.guild is not None:
                        orphaned = [s for s in removed if self.repo.count_watchers(s) == 0]
                        if orphaned:
                            result = await self.bot.earnings_sync.delete_events(message.guild, orphaned)
                            if result.deleted:
                                reply += f"\n🗑️ Also deleted {len(result.deleted)} earnings event(s)."
        except sqlite3.Error as e:
            log.error("watchlist_clear_failed", user_id=message.author.id, error=str(e))
            reply = "❌ An error occurred while clearing your watchlist."

        await send_reply(message, reply)
