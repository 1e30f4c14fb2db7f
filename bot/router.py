"""Dispatch inbound channel messages to the command handlers."""

import re
from typing import Any

import structlog

from bot.formatters import HELP_TEXT, INVALID_TICKER_FORMAT
from bot.handlers.chat import ChatHandler
from bot.handlers.common import send_reply
from bot.handlers.earnings import EarningsHandler
from bot.handlers.insider import InsiderHandler
from bot.handlers.quote import QuoteHandler
from bot.handlers.watch import WatchHandler
from utils.formatting import validate_ticker

log = structlog.get_logger(__name__)

_MENTION_RE = re.compile(r"<@!?\d+>")


def strip_mentions(text: str) -> str:
    return _MENTION_RE.sub("", text).strip()


class CommandRouter:
    """Stateless dispatch on the leading token of a message."""

    def __init__(self, bot: Any) -> None:
        self.bot = bot
        self.quote = QuoteHandler(bot)
        self.watch = WatchHandler(bot)
        self.earnings = EarningsHandler(bot)
        self.insider = InsiderHandler(bot)
        self.chat = ChatHandler(bot)

    def is_mentioned(self, message: Any) -> bool:
        return self.bot.user is not None and self.bot.user.mentioned_in(message)

    async def route(self, message: Any) -> bool:
        """Handle message. Returns False when it was not meant for the bot."""
        text = message.content.strip()

        if text.startswith("/"):
            await self.dispatch_command(message, text)
            return True

        if self.is_mentioned(message):
            utterance = strip_mentions(text)
            if utterance:
                await self.chat.handle(message, utterance)
                return True

        return False

    async def dispatch_command(self, message: Any, text: str) -> None:
        lowered = text.lower()
        args = text.split()[1:]

        if lowered == "/help":
            await send_reply(message, HELP_TEXT)
        elif lowered.startswith("/watch"):
            await self.watch.handle(message, args)
        elif lowered.startswith("/earn"):
            await self.earnings.handle(message, args)
        elif lowered.startswith("/insider"):
            await self.insider.handle(message, args)
        else:
            symbol = validate_ticker(text[1:])
            if symbol is None:
                await send_reply(message, INVALID_TICKER_FORMAT)
                return
            await self.quote.handle(message, symbol)

        log.debug("command_routed", command=lowered.split()[0], user_id=message.author.id)
