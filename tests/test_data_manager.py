"""Tests for data/manager.py — normalizing Yahoo Finance responses."""

from datetime import date, datetime
from unittest.mock import AsyncMock, MagicMock

import pandas as pd
import pytest

from data.collectors.yahoo import _records
from data.manager import DataManager


@pytest.fixture
def yahoo():
    y = MagicMock()
    y.get_info = AsyncMock(return_value={
        "shortName": "Apple Inc.",
        "regularMarketPrice": 150.0,
        "regularMarketChange": 1.82,
        "regularMarketChangePercent": 1.23,
        "regularMarketDayHigh": 151.0,
        "regularMarketDayLow": 149.0,
        "fiftyTwoWeekHigh": 180.0,
        "fiftyTwoWeekLow": 120.0,
        "regularMarketVolume": 52_000_000,
        "marketCap": 2.4e12,
    })
    y.get_calendar = AsyncMock(return_value={})
    y.get_earnings_history = AsyncMock(return_value=[])
    y.get_insider_transactions = AsyncMock(return_value=[])
    y.get_insider_holders = AsyncMock(return_value=[])
    return y


@pytest.fixture
def dm(yahoo):
    return DataManager(yahoo=yahoo)


class TestGetQuote:
    async def test_normalizes_fields(self, dm):
        quote = await dm.get_quote("AAPL")
        assert quote.symbol == "AAPL"
        assert quote.name == "Apple Inc."
        assert quote.price == 150.0
        assert quote.change_percent == 1.23
        assert quote.fifty_two_week_low == 120.0
        assert quote.volume == 52_000_000

    async def test_no_price_is_not_found(self, dm, yahoo):
        yahoo.get_info.return_value = {"trailingPegRatio": None}
        assert await dm.get_quote("ZZZZZ") is None

    async def test_provider_error_is_not_found(self, dm, yahoo):
        yahoo.get_info.side_effect = RuntimeError("HTTP 404")
        assert await dm.get_quote("AAPL") is None

    async def test_get_quotes_keeps_order(self, dm, yahoo):
        async def info(symbol):
            return {"regularMarketPrice": 1.0} if symbol != "BAD" else {}

        yahoo.get_info.side_effect = info
        quotes = await dm.get_quotes(["AAPL", "BAD", "MSFT"])
        assert [q.symbol if q else None for q in quotes] == ["AAPL", None, "MSFT"]


class TestEarningsDate:
    async def test_range_is_estimate(self, dm, yahoo):
        yahoo.get_calendar.return_value = {
            "Earnings Date": [date(2026, 10, 29), date(2026, 11, 2)],
            "Earnings Average": 1.6,
            "Earnings Low": 1.5,
            "Earnings High": 1.7,
            "Revenue Average": 94_500_000_000,
        }
        est = await dm.get_earnings_date("AAPL")
        assert est.report_date == date(2026, 10, 29)
        assert est.is_estimate is True
        assert est.eps_low == 1.5
        assert est.revenue_average == 94.5e9

    async def test_single_date_confirmed(self, dm, yahoo):
        yahoo.get_calendar.return_value = {"Earnings Date": [date(2026, 10, 29)]}
        est = await dm.get_earnings_date("AAPL")
        assert est.is_estimate is False

    async def test_missing(self, dm):
        assert await dm.get_earnings_date("AAPL") is None


class TestEarningsHistory:
    async def test_newest_first(self, dm, yahoo):
        yahoo.get_earnings_history.return_value = [
            {"quarter": pd.Timestamp("2026-03-31"), "epsActual": 1.5, "epsEstimate": 1.4, "surprisePercent": 0.07},
            {"quarter": pd.Timestamp("2026-06-30"), "epsActual": 1.6, "epsEstimate": 1.5, "surprisePercent": 0.06},
        ]
        history = await dm.get_earnings_history("AAPL")
        assert [q.label for q in history.quarters] == ["2026-06-30", "2026-03-31"]

    async def test_undated_quarters_sorted_last(self, dm, yahoo):
        yahoo.get_earnings_history.return_value = [
            {"quarter": None, "epsActual": 0.9, "epsEstimate": 1.0, "surprisePercent": -0.1},
            {"quarter": pd.Timestamp("2026-03-31"), "epsActual": 1.5, "epsEstimate": 1.4, "surprisePercent": 0.07},
            {"quarter": pd.Timestamp("2026-06-30"), "epsActual": 1.6, "epsEstimate": 1.5, "surprisePercent": 0.06},
        ]
        history = await dm.get_earnings_history("AAPL")
        assert [q.label for q in history.quarters] == ["2026-06-30", "2026-03-31", "Unknown"]

    async def test_empty(self, dm):
        assert await dm.get_earnings_history("AAPL") is None


class TestInsiderActivity:
    async def test_maps_rows(self, dm, yahoo):
        yahoo.get_insider_transactions.return_value = [{
            "Insider": "COOK TIMOTHY D", "Position": "Chief Executive Officer",
            "Text": "Sale at price 226.00 per share.", "Shares": 100_000.0,
            "Value": 22_600_000.0, "Start Date": pd.Timestamp("2026-10-01"),
        }]
        activity = await dm.get_insider_activity("AAPL")
        tx = activity.transactions[0]
        assert tx.filer_name == "COOK TIMOTHY D"
        assert tx.shares == 100_000
        assert tx.start_date == datetime(2026, 10, 1)

    async def test_nothing_found(self, dm):
        assert await dm.get_insider_activity("AAPL") is None


class TestRecords:
    def test_nan_becomes_none(self):
        frame = pd.DataFrame({"Shares": [10.0, float("nan")], "Text": ["Buy", None]})
        rows = _records(frame)
        assert rows[1]["Shares"] is None
        assert rows[1]["Text"] is None
        assert rows[0]["Shares"] == 10.0

    def test_empty_frame(self):
        assert _records(pd.DataFrame()) == []
        assert _records(None) == []
