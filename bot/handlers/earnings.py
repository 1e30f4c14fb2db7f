"""`/earn estimate|history SYMBOL`."""

from typing import Any

from bot.formatters import EARN_HELP, format_earnings_estimate, format_earnings_history, invalid_symbol
from bot.handlers.common import send_reply
from bot.typing_indicator import keep_typing
from utils.formatting import validate_ticker


class EarningsHandler:
    def __init__(self, bot: Any) -> None:
        self.bot = bot

    async def handle(self, message: Any, args: list[str]) -> None:
        subcommand = args[0].lower() if args else ""
        if subcommand not in ("estimate", "history"):
            await send_reply(message, EARN_HELP)
            return

        symbol = validate_ticker(args[1] if len(args) > 1 else None)
        if not symbol:
            await send_reply(message, invalid_symbol(f"/earn {subcommand} AAPL"))
            return

        if subcommand == "estimate":
            async with keep_typing(message.channel):
                estimate = await self.bot.data_manager.get_earnings_date(symbol)
            if estimate is None:
                await send_reply(message, f"❌ No earnings data found for **{symbol}**.")
            else:
                await send_reply(message, format_earnings_estimate(estimate))
            return

        async with keep_typing(message.channel):
            history = await self.bot.data_manager.get_earnings_history(symbol)
        if history is None or not history.quarters:
            await send_reply(message, f"❌ No earnings history found for **{symbol}**.")
        else:
            await send_reply(message, format_earnings_history(history))
