"""Short-lived per-user conversation memory."""

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

import structlog

from config.constants import (
    CONVERSATION_TIMEOUT_SECONDS,
    MAX_CONVERSATION_HISTORY,
    Role,
)

log = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Exchange:
    role: Role
    author: str
    content: str
    timestamp: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class TranscriptEntry:
    """One line of grounding context, from channel history or the store."""

    author: str
    content: str
    is_bot: bool
    timestamp: datetime


@dataclass
class ConversationRecord:
    user_id: int
    history: deque[Exchange]
    last_activity: datetime


class ConversationStore:
    """Bounded, idle-expiring history keyed by user id.

    Every method is synchronous, so on the event loop no caller can observe a
    half-applied update. Records for different users never share state.
    History is bounded by message count rather than tokens, which is enough
    for a handful of guilds but not a token-budget guarantee.
    """

    def __init__(
        self,
        max_history: int = MAX_CONVERSATION_HISTORY,
        timeout: timedelta = timedelta(seconds=CONVERSATION_TIMEOUT_SECONDS),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.max_history = max_history
        self.timeout = timeout
        self.clock = clock
        self._records: dict[int, ConversationRecord] = {}

    def init(self) -> None:
        self._records.clear()
        log.info("conversation_store_ready", max_history=self.max_history,
                 timeout_seconds=self.timeout.total_seconds())

    def shutdown(self) -> None:
        count = len(self._records)
        self._records.clear()
        log.info("conversation_store_shutdown", dropped=count)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, user_id: int) -> bool:
        return user_id in self._records

    def record(self, user_id: int, exchange: Exchange) -> None:
        """Append to the user's history, evicting the oldest beyond the bound.

        last_activity is the time of the append, whatever the exchange's own
        timestamp says.
        """
        now = self.clock()
        record = self._records.get(user_id)
        if record is None:
            record = ConversationRecord(
                user_id=user_id,
                history=deque(maxlen=self.max_history),
                last_activity=now,
            )
            self._records[user_id] = record
        record.history.append(exchange)
        record.last_activity = now

    def get(self, user_id: int) -> list[Exchange]:
        record = self._records.get(user_id)
        return list(record.history) if record else []

    def last_activity(self, user_id: int) -> datetime | None:
        record = self._records.get(user_id)
        return record.last_activity if record else None

    def transcript(self, user_id: int) -> list[TranscriptEntry]:
        return [
            TranscriptEntry(
                author=e.author,
                content=e.content,
                is_bot=e.role == Role.ASSISTANT,
                timestamp=e.timestamp,
            )
            for e in self.get(user_id)
        ]

    def sweep(self, now: datetime | None = None) -> int:
        """Drop every record idle for longer than the timeout."""
        now = now or self.clock()
        expired = [
            user_id for user_id, record in self._records.items()
            if now - record.last_activity > self.timeout
        ]
        for user_id in expired:
            del self._records[user_id]
        if expired:
            log.info("conversations_expired", count=len(expired), remaining=len(self._records))
        return len(expired)
