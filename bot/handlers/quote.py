"""`/SYMBOL` quote lookups."""

from typing import Any

import structlog

from bot.formatters import format_quote, ticker_not_found
from bot.handlers.common import send_reply
from bot.typing_indicator import keep_typing

log = structlog.get_logger(__name__)


class QuoteHandler:
    def __init__(self, bot: Any) -> None:
        self.bot = bot

    async def handle(self, message: Any, symbol: str) -> None:
        async with keep_typing(message.channel):
            quote = await self.bot.data_manager.get_quote(symbol)

        if quote is None:
            await send_reply(message, ticker_not_found(symbol))
            return

        log.info("quote_served", symbol=symbol, user_id=message.author.id)
        await send_reply(message, format_quote(quote))
