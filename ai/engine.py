"""Chat engine: groundedness pre-check, prompt assembly, model call, fallback."""

from collections.abc import Sequence

import structlog

from ai.conversation import ConversationStore, Exchange, TranscriptEntry
from ai.models import ModelConfig
from ai.ollama_client import ModelError, ModelUnavailableError, OllamaClient
from ai.prompts.assembly import (
    build_messages,
    filter_transcript,
    format_stock_data,
    format_transcript,
    has_relevant_data,
)
from config.constants import AI_OFFLINE_REPLY, FALLBACK_REPLIES, NO_INFO_REPLY, Role
from data.manager import DataManager
from utils.formatting import extract_ticker_symbols

log = structlog.get_logger(__name__)


def fallback_reply(text: str, error: ModelError) -> str | None:
    """Canned reply for when the model call fails. None means stay silent.

    An unreachable server always gets the offline notice, so users learn the
    model is down even when they only said hello.
    """
    if isinstance(error, ModelUnavailableError):
        return AI_OFFLINE_REPLY
    for pattern, reply in FALLBACK_REPLIES:
        if pattern.search(text):
            return reply
    return None


class ChatEngine:
    """Answers mention-triggered chat strictly from the supplied transcript."""

    def __init__(
        self,
        client: OllamaClient,
        config: ModelConfig,
        store: ConversationStore,
        data_manager: DataManager | None = None,
        bot_name: str = "Stoink",
    ) -> None:
        self.client = client
        self.config = config
        self.store = store
        self.data_manager = data_manager
        self.bot_name = bot_name

    async def build_stock_context(self, text: str) -> str:
        """Fetch quotes for tickers named in `text` and render them as a data block."""
        if self.data_manager is None:
            return ""
        symbols = extract_ticker_symbols(text)
        if not symbols:
            return ""
        quotes = [q for q in await self.data_manager.get_quotes(symbols) if q is not None]
        log.debug("stock_context_built", requested=symbols, resolved=[q.symbol for q in quotes])
        return format_stock_data(quotes)

    async def respond(
        self,
        text: str,
        username: str,
        user_id: int,
        transcript: Sequence[TranscriptEntry] = (),
        stock_data: str = "",
    ) -> str | None:
        """Produce a reply for `text`, or None when nothing should be sent."""
        self.store.record(user_id, Exchange(role=Role.USER, author=username, content=text))

        chat_history = format_transcript(filter_transcript(transcript))

        if not has_relevant_data(text, chat_history, stock_data):
            log.info("chat_precheck_refused", user_id=user_id)
            return NO_INFO_REPLY

        messages = build_messages(text, username, chat_history, stock_data)

        try:
            reply = await self.client.chat(messages, self.config)
        except ModelError as e:
            log.warning("chat_model_failed", user_id=user_id, error=str(e),
                        unavailable=isinstance(e, ModelUnavailableError))
            return fallback_reply(text, e)

        reply = reply.strip()
        if not reply:
            return None

        self.store.record(user_id, Exchange(role=Role.ASSISTANT, author=self.bot_name, content=reply))
        log.info("chat_replied", user_id=user_id, model=self.config.model_id, chars=len(reply))
        return reply
