"""Mention-triggered conversation grounded in the channel's recent history."""

from typing import Any

import discord
import structlog

from ai.conversation import TranscriptEntry
from bot.handlers.common import send_reply
from bot.typing_indicator import keep_typing
from config.constants import MAX_TRANSCRIPT_MESSAGES

log = structlog.get_logger(__name__)


class ChatHandler:
    def __init__(self, bot: Any) -> None:
        self.bot = bot

    async def fetch_transcript(self, message: Any) -> list[TranscriptEntry]:
        """Channel messages before `message`, oldest first.

        Falls back to the author's stored conversation when history is
        unavailable or empty.
        """
        try:
            history = [
                m async for m in message.channel.history(limit=MAX_TRANSCRIPT_MESSAGES, before=message)
            ]
        except discord.HTTPException as e:
            log.warning("channel_history_failed", channel_id=message.channel.id, error=str(e))
            history = []

        if not history:
            return self.bot.conversation_store.transcript(message.author.id)

        history.reverse()
        return [
            TranscriptEntry(
                author=m.author.name,
                content=m.content,
                is_bot=m.author.bot,
                timestamp=m.created_at,
            )
            for m in history
        ]

    async def handle(self, message: Any, text: str) -> None:
        engine = self.bot.chat_engine
        log.info("chat_request", user_id=message.author.id, content=text[:80])

        async with keep_typing(message.channel):
            transcript = await self.fetch_transcript(message)
            stock_data = await engine.build_stock_context(text)
            reply = await engine.respond(
                text,
                username=message.author.name,
                user_id=message.author.id,
                transcript=transcript,
                stock_data=stock_data,
            )

        if reply:
            await send_reply(message, reply)
