"""Reply helper shared by the command handlers."""

from typing import Any

import discord
import structlog

from utils.formatting import split_message

log = structlog.get_logger(__name__)


async def send_reply(message: Any, text: str) -> None:
    """Reply to message, splitting at Discord's length limit. Failures are logged, not retried."""
    chunks = split_message(text)
    try:
        await message.reply(chunks[0])
        for chunk in chunks[1:]:
            await message.channel.send(chunk)
    except discord.HTTPException as e:
        log.error("reply_failed", channel_id=getattr(message.channel, "id", None), error=str(e))
