"""Yahoo Finance collector — quotes, earnings calendar/history, insider activity.

yfinance is blocking, so every call is pushed to a worker thread.
"""

import asyncio
from typing import Any

import pandas as pd
import structlog
import yfinance as yf

log = structlog.get_logger(__name__)


def _records(frame: pd.DataFrame | None) -> list[dict[str, Any]]:
    """DataFrame rows as dicts with NaN/NaT replaced by None."""
    if frame is None or frame.empty:
        return []
    rows = frame.reset_index().to_dict("records")
    return [{k: (None if _is_missing(v) else v) for k, v in row.items()} for row in rows]


def _is_missing(value: Any) -> bool:
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        # Lists/arrays are never "missing" as a whole
        return False


class YahooCollector:
    api_name = "yahoo"

    def _ticker(self, symbol: str) -> yf.Ticker:
        return yf.Ticker(symbol)

    async def get_info(self, symbol: str) -> dict[str, Any]:
        """Quote and company summary fields."""
        return await asyncio.to_thread(lambda: dict(self._ticker(symbol).info or {}))

    async def get_calendar(self, symbol: str) -> dict[str, Any]:
        """Upcoming earnings date(s) and EPS/revenue estimate ranges."""
        def fetch() -> dict[str, Any]:
            calendar = self._ticker(symbol).calendar
            return dict(calendar) if calendar else {}

        return await asyncio.to_thread(fetch)

    async def get_earnings_history(self, symbol: str) -> list[dict[str, Any]]:
        """Reported vs. estimated EPS per quarter."""
        return await asyncio.to_thread(lambda: _records(self._ticker(symbol).earnings_history))

    async def get_insider_transactions(self, symbol: str) -> list[dict[str, Any]]:
        return await asyncio.to_thread(lambda: _records(self._ticker(symbol).insider_transactions))

    async def get_insider_holders(self, symbol: str) -> list[dict[str, Any]]:
        return await asyncio.to_thread(lambda: _records(self._ticker(symbol).insider_roster_holders))
