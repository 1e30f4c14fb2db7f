"""Typing indicator kept alive for the duration of a block."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import structlog

from config.constants import TYPING_REFRESH_SECONDS

log = structlog.get_logger(__name__)


async def _trigger(channel: Any) -> bool:
    # Typing is cosmetic; gateway and socket errors alike are logged and dropped
    try:
        await channel.trigger_typing()
        return True
    except Exception as e:
        log.debug("typing_failed", channel_id=getattr(channel, "id", None), error=repr(e))
        return False


async def _refresh(channel: Any, interval: float) -> None:
    while True:
        await asyncio.sleep(interval)
        if not await _trigger(channel):
            return


@asynccontextmanager
async def keep_typing(channel: Any, interval: float = TYPING_REFRESH_SECONDS) -> AsyncIterator[None]:
    """Show "typing..." in channel until the block exits, however it exits.

    Discord drops the indicator after ~10s, so it is re-sent every `interval`.
    Failures to send it never reach the block.
    """
    task = None
    if await _trigger(channel):
        task = asyncio.create_task(_refresh(channel, interval))
    try:
        yield
    finally:
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
            except Exception as e:
                log.warning("typing_refresh_crashed", channel_id=getattr(channel, "id", None), error=repr(e))
