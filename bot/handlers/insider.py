"""`/insider [limit] SYMBOL`."""

from typing import Any

from bot.formatters import INSIDER_FORMAT_ERROR, format_insider_activity, invalid_symbol
from bot.handlers.common import send_reply
from bot.typing_indicator import keep_typing
from config.constants import INSIDER_DEFAULT_LIMIT, INSIDER_MAX_LIMIT
from utils.formatting import validate_ticker

_USAGE = "/insider AAPL` or `/insider 10 AAPL"


def parse_insider_args(args: list[str]) -> tuple[int, str | None] | None:
    """(limit, raw symbol) from the command arguments; None for a non-numeric limit."""
    if len(args) >= 2:
        try:
            limit = int(args[0])
        except ValueError:
            return None
        return max(1, min(limit, INSIDER_MAX_LIMIT)), args[1]
    if len(args) == 1:
        return INSIDER_DEFAULT_LIMIT, args[0]
    return INSIDER_DEFAULT_LIMIT, None


class InsiderHandler:
    def __init__(self, bot: Any) -> None:
        self.bot = bot

    async def handle(self, message: Any, args: list[str]) -> None:
        parsed = parse_insider_args(args)
        if parsed is None:
            await send_reply(message, INSIDER_FORMAT_ERROR)
            return

        limit, raw_symbol = parsed
        symbol = validate_ticker(raw_symbol)
        if not symbol:
            await send_reply(message, invalid_symbol(_USAGE))
            return

        async with keep_typing(message.channel):
            activity = await self.bot.data_manager.get_insider_activity(symbol)

        if activity is None:
            await send_reply(message, f"❌ No insider transaction data found for **{symbol}**.")
            return
        await send_reply(message, format_insider_activity(activity, limit))
