"""Entry point: initialize services, wire events, start bot."""

import asyncio

import structlog

from ai.conversation import ConversationStore
from ai.engine import ChatEngine
from ai.models import ModelConfig
from ai.ollama_client import OllamaClient
from bot.client import StoinkBot
from bot.events import setup_events
from config.logging_config import setup_logging
from config.settings import settings
from data.manager import DataManager
from scheduler.earnings_sync import EarningsEventSync
from scheduler.scheduler import ActivityTracker, Scheduler
from storage.database import Database
from storage.repositories.event_repo import EarningsEventRepository

log = structlog.get_logger(__name__)


async def start_bot() -> None:
    """Initialize all services and start the bot."""
    setup_logging()
    log.info("starting_stoink", model=settings.ollama_model, channel_id=settings.chat_channel_id)

    bot = StoinkBot()

    # Initialize database
    db = Database(settings.database_path)
    db.run_migrations()
    bot.db = db

    # Initialize data layer
    data_manager = DataManager()
    bot.data_manager = data_manager

    # Conversation memory and chat engine
    store = ConversationStore()
    store.init()
    bot.conversation_store = store

    ollama = OllamaClient(settings.ollama_base_url, timeout=settings.ollama_timeout)
    if not await ollama.is_available():
        log.warning("ollama_unreachable", base_url=settings.ollama_base_url)
    bot.chat_engine = ChatEngine(
        client=ollama,
        config=ModelConfig.from_settings(settings),
        store=store,
        data_manager=data_manager,
    )

    bot.earnings_sync = EarningsEventSync(EarningsEventRepository(db), data_manager)

    # Initialize scheduler
    activity = ActivityTracker()
    bot.activity_tracker = activity
    scheduler = Scheduler(
        bot=bot,
        store=store,
        activity=activity,
        idle_timeout_minutes=settings.idle_timeout_minutes,
    )
    bot.scheduler = scheduler

    # Setup event handlers
    setup_events(bot)

    startup_done = False

    @bot.event
    async def on_ready() -> None:
        nonlocal startup_done
        log.info("bot_ready", user=str(bot.user), guilds=[(g.id, g.name) for g in bot.guilds])
        # on_ready fires again after every reconnect
        if startup_done:
            return
        startup_done = True

        scheduler.start()
        log.info("scheduler_started")
        await bot.send_greeting()
        await scheduler.sync_earnings_events()

    try:
        await bot.start(settings.discord_token)
    finally:
        log.info("shutting_down")
        scheduler.stop()
        await ollama.close()
        store.shutdown()
        db.close()


def main() -> None:
    """Run the bot."""
    asyncio.run(start_bot())


if __name__ == "__main__":
    main()
