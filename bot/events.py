"""Discord event handlers."""

import discord
import structlog

from bot.client import StoinkBot
from bot.router import CommandRouter
from config.settings import settings

log = structlog.get_logger(__name__)


def setup_events(bot: StoinkBot, router: CommandRouter | None = None) -> CommandRouter:
    """Register event handlers on the bot."""
    router = router or CommandRouter(bot)

    @bot.event
    async def on_message(message: discord.Message) -> None:
        await handle_message(bot, router, message)

    return router


async def handle_message(bot: StoinkBot, router: CommandRouter, message: discord.Message) -> None:
    # Ignore bots, including ourselves
    if message.author.bot:
        return

    # Only the configured chat channel is served
    if message.channel.id != settings.chat_channel_id:
        return

    if bot.activity_tracker is not None:
        bot.activity_tracker.touch()

    try:
        await router.route(message)
    except Exception as e:
        log.error("message_handling_error", error=str(e), user_id=message.author.id)
