"""Tests for scheduler/scheduler.py and the inbound message gate."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from ai.conversation import ConversationStore, Exchange
from bot.events import handle_message
from config.constants import Role
from scheduler.earnings_sync import SyncResult
from scheduler.scheduler import ActivityTracker, Scheduler
from storage.repositories.watchlist_repo import WatchlistRepository
from tests.conftest import CHAT_CHANNEL_ID, make_author, make_message


class FakeClock:
    def __init__(self):
        self.t = 1000.0

    def __call__(self):
        return self.t


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def bot(db):
    b = MagicMock()
    b.db = db
    b.close = AsyncMock()
    b.guilds = []
    b.earnings_sync = MagicMock()
    b.earnings_sync.sync_guild = AsyncMock(return_value=SyncResult())
    return b


@pytest.fixture
def scheduler(bot, store, clock):
    return Scheduler(bot=bot, store=store, activity=ActivityTracker(clock), idle_timeout_minutes=10)


class TestIdleShutdown:
    async def test_active_bot_stays_up(self, scheduler, bot, clock):
        clock.t += 9 * 60
        assert await scheduler.check_idle() is False
        bot.close.assert_not_awaited()

    async def test_idle_bot_closes(self, scheduler, bot, clock):
        clock.t += 10 * 60 + 1
        assert await scheduler.check_idle() is True
        bot.close.assert_awaited_once()

    async def test_touch_resets_clock(self, scheduler, bot, clock):
        clock.t += 9 * 60
        scheduler.activity.touch()
        clock.t += 9 * 60
        assert await scheduler.check_idle() is False


class TestSweep:
    def test_sweep_drops_stale_conversations(self, bot, clock):
        now = [datetime(2026, 10, 17, 12, 0, tzinfo=UTC)]
        store = ConversationStore(clock=lambda: now[0])
        scheduler = Scheduler(bot=bot, store=store, activity=ActivityTracker(clock), idle_timeout_minutes=10)

        store.record(1, Exchange(Role.USER, "a", "hi"))
        now[0] += timedelta(minutes=20)
        store.record(2, Exchange(Role.USER, "b", "hi"))

        assert scheduler.sweep_conversations() == 1
        assert 1 not in store
        assert 2 in store


class TestStartupSync:
    async def test_syncs_every_guild(self, scheduler, bot, db):
        repo = WatchlistRepository(db)
        repo.add(1, "MSFT")
        repo.add(2, "AAPL")
        g1, g2 = MagicMock(id=1), MagicMock(id=2)
        bot.guilds = [g1, g2]

        results = await scheduler.sync_earnings_events()

        assert set(results) == {1, 2}
        bot.earnings_sync.sync_guild.assert_any_await(g1, ["AAPL", "MSFT"])
        bot.earnings_sync.sync_guild.assert_any_await(g2, ["AAPL", "MSFT"])

    async def test_no_symbols_skips(self, scheduler, bot):
        bot.guilds = [MagicMock(id=1)]
        assert await scheduler.sync_earnings_events() == {}
        bot.earnings_sync.sync_guild.assert_not_awaited()


class TestMessageGate:
    @pytest.fixture
    def gate_bot(self, clock):
        b = MagicMock()
        b.activity_tracker = ActivityTracker(clock)
        return b

    @pytest.fixture
    def router(self):
        r = MagicMock()
        r.route = AsyncMock(return_value=True)
        return r

    async def test_routes_channel_messages_and_touches(self, gate_bot, router, clock):
        clock.t += 100
        msg = make_message("/AAPL", channel_id=CHAT_CHANNEL_ID)
        await handle_message(gate_bot, router, msg)
        router.route.assert_awaited_once_with(msg)
        assert gate_bot.activity_tracker.idle_seconds() == 0

    async def test_other_channels_ignored(self, gate_bot, router):
        await handle_message(gate_bot, router, make_message("/AAPL", channel_id=1))
        router.route.assert_not_awaited()

    async def test_bot_authors_ignored(self, gate_bot, router):
        msg = make_message("/AAPL", author=make_author(bot=True))
        await handle_message(gate_bot, router, msg)
        router.route.assert_not_awaited()

    async def test_handler_errors_contained(self, gate_bot, router):
        router.route.side_effect = RuntimeError("boom")
        await handle_message(gate_bot, router, make_message("/AAPL"))
