"""Shared test fixtures for the Stoink test suite."""

import os
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

# Ensure settings can be imported without real env vars
os.environ.setdefault("DISCORD_TOKEN", "test-token")
os.environ.setdefault("CHAT_CHANNEL_ID", "4242")

from ai.conversation import ConversationStore  # noqa: E402
from data.models import QuoteSnapshot  # noqa: E402
from storage.database import Database  # noqa: E402

CHAT_CHANNEL_ID = 4242


# ── Database ──


@pytest.fixture
def db():
    """In-memory SQLite with all migrations applied."""
    database = Database(":memory:")
    database.run_migrations()
    yield database
    database.close()


# ── Market data ──


def make_quote(symbol: str = "AAPL", **overrides) -> QuoteSnapshot:
    values = dict(
        symbol=symbol,
        name="Apple Inc.",
        price=150.00,
        change=1.82,
        change_percent=1.23,
        day_high=151.0,
        day_low=149.0,
        fifty_two_week_high=180.0,
        fifty_two_week_low=120.0,
        volume=52_000_000,
        market_cap=2_400_000_000_000,
    )
    values.update(overrides)
    return QuoteSnapshot(**values)


@pytest.fixture
def mock_data_manager():
    """Mock DataManager with all methods as AsyncMock."""
    dm = MagicMock()
    dm.get_quote = AsyncMock(return_value=make_quote())
    dm.get_quotes = AsyncMock(side_effect=lambda symbols: [make_quote(s) for s in symbols])
    dm.get_earnings_date = AsyncMock(return_value=None)
    dm.get_earnings_history = AsyncMock(return_value=None)
    dm.get_insider_activity = AsyncMock(return_value=None)
    return dm


# ── Discord fakes ──


class FakeHistory:
    """Async iterator standing in for channel.history()."""

    def __init__(self, messages):
        self._messages = list(messages)

    def __aiter__(self):
        return self._iter()

    async def _iter(self):
        for m in self._messages:
            yield m


def make_author(user_id: int = 1001, name: str = "trader", bot: bool = False) -> MagicMock:
    author = MagicMock()
    author.id = user_id
    author.name = name
    author.bot = bot
    return author


def make_message(
    content: str,
    *,
    author: MagicMock | None = None,
    channel_id: int = CHAT_CHANNEL_ID,
    guild: object | None = None,
    history: list | None = None,
) -> MagicMock:
    message = MagicMock()
    message.content = content
    message.author = author or make_author()
    message.guild = guild
    message.created_at = datetime.now(UTC)
    message.reply = AsyncMock()

    channel = MagicMock()
    channel.id = channel_id
    channel.trigger_typing = AsyncMock()
    channel.send = AsyncMock()
    channel.history = MagicMock(return_value=FakeHistory(history or []))
    message.channel = channel
    return message


def replies(message: MagicMock) -> list[str]:
    """All text the bot replied with."""
    return [call.args[0] for call in message.reply.await_args_list]


@pytest.fixture
def store():
    s = ConversationStore()
    s.init()
    return s


@pytest.fixture
def fake_guild():
    guild = MagicMock()
    guild.id = 777
    guild.fetch_scheduled_events = AsyncMock(return_value=[])
    guild.fetch_scheduled_event = AsyncMock()
    guild.create_scheduled_event = AsyncMock()
    return guild


@pytest.fixture
def now():
    """Current UTC datetime."""
    return datetime.now(UTC)
