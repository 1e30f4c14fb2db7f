"""Data manager — normalizes Yahoo Finance responses into market data records.

Every public method returns None when the symbol is unknown or the provider
fails; callers turn that into a "not found" reply. Nothing is cached: each
request gets fresh data.
"""

import asyncio
from datetime import date, datetime
from typing import Any

import structlog

from data.collectors.yahoo import YahooCollector
from data.models import (
    EarningsDate,
    EarningsHistory,
    EarningsQuarter,
    InsiderActivity,
    InsiderHolder,
    InsiderTransaction,
    QuoteSnapshot,
)

log = structlog.get_logger(__name__)


def _float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _int(value: Any) -> int | None:
    number = _float(value)
    return int(number) if number is not None else None


def _as_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if hasattr(value, "to_pydatetime"):
        return value.to_pydatetime().date()
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None


def _as_datetime(value: Any) -> datetime | date | None:
    if hasattr(value, "to_pydatetime"):
        return value.to_pydatetime()
    if isinstance(value, (datetime, date)):
        return value
    return _as_date(value)


class DataManager:
    """Central access point for market data."""

    def __init__(self, yahoo: YahooCollector | None = None) -> None:
        self.yahoo = yahoo or YahooCollector()

    async def get_quote(self, symbol: str) -> QuoteSnapshot | None:
        """Fresh quote for symbol, or None if it does not resolve."""
        try:
            info = await self.yahoo.get_info(symbol)
        except Exception as e:
            log.warning("quote_fetch_failed", symbol=symbol, error=str(e))
            return None

        price = _float(info.get("regularMarketPrice") or info.get("currentPrice"))
        if price is None:
            log.info("quote_not_found", symbol=symbol)
            return None

        return QuoteSnapshot(
            symbol=symbol,
            name=info.get("shortName") or info.get("longName") or symbol,
            price=price,
            change=_float(info.get("regularMarketChange")),
            change_percent=_float(info.get("regularMarketChangePercent")),
            day_high=_float(info.get("regularMarketDayHigh") or info.get("dayHigh")),
            day_low=_float(info.get("regularMarketDayLow") or info.get("dayLow")),
            fifty_two_week_high=_float(info.get("fiftyTwoWeekHigh")),
            fifty_two_week_low=_float(info.get("fiftyTwoWeekLow")),
            volume=_int(info.get("regularMarketVolume") or info.get("volume")),
            market_cap=_float(info.get("marketCap")),
        )

    async def get_quotes(self, symbols: list[str]) -> list[QuoteSnapshot | None]:
        """Quotes for several symbols, fetched concurrently, in input order."""
        return list(await asyncio.gather(*(self.get_quote(s) for s in symbols)))

    async def get_earnings_date(self, symbol: str) -> EarningsDate | None:
        """Next earnings date with EPS/revenue estimate ranges."""
        try:
            calendar = await self.yahoo.get_calendar(symbol)
        except Exception as e:
            log.warning("earnings_calendar_failed", symbol=symbol, error=str(e))
            return None

        dates = calendar.get("Earnings Date")
        if isinstance(dates, (list, tuple)):
            dates = [d for d in (_as_date(v) for v in dates) if d is not None]
            report_date = dates[0] if dates else None
            # Yahoo gives a range while the date is unconfirmed
            is_estimate = len(dates) > 1
        else:
            report_date = _as_date(dates)
            is_estimate = False

        if report_date is None:
            log.info("earnings_date_not_found", symbol=symbol)
            return None

        log.info("earnings_date_found", symbol=symbol, report_date=report_date.isoformat())
        return EarningsDate(
            symbol=symbol,
            report_date=report_date,
            is_estimate=is_estimate,
            eps_average=_float(calendar.get("Earnings Average")),
            eps_low=_float(calendar.get("Earnings Low")),
            eps_high=_float(calendar.get("Earnings High")),
            revenue_average=_float(calendar.get("Revenue Average")),
            revenue_low=_float(calendar.get("Revenue Low")),
            revenue_high=_float(calendar.get("Revenue High")),
        )

    async def get_earnings_history(self, symbol: str) -> EarningsHistory | None:
        """Recent reported quarters, newest first."""
        try:
            rows = await self.yahoo.get_earnings_history(symbol)
        except Exception as e:
            log.warning("earnings_history_failed", symbol=symbol, error=str(e))
            return None

        if not rows:
            return None

        dated: list[tuple[date, EarningsQuarter]] = []
        undated: list[EarningsQuarter] = []
        for row in rows:
            when = _as_date(row.get("quarter") or row.get("index"))
            quarter = EarningsQuarter(
                label=when.isoformat() if when else "Unknown",
                eps_actual=_float(row.get("epsActual")),
                eps_estimate=_float(row.get("epsEstimate")),
                surprise_percent=_float(row.get("surprisePercent")),
            )
            if when is None:
                undated.append(quarter)
            else:
                dated.append((when, quarter))

        # Newest first, undated rows after every dated one
        dated.sort(key=lambda pair: pair[0], reverse=True)
        quarters = [q for _, q in dated] + undated
        return EarningsHistory(symbol=symbol, quarters=quarters)

    async def get_insider_activity(self, symbol: str) -> InsiderActivity | None:
        """Recent insider transactions (newest first) and insider holders."""
        try:
            tx_rows, holder_rows = await asyncio.gather(
                self.yahoo.get_insider_transactions(symbol),
                self.yahoo.get_insider_holders(symbol),
            )
        except Exception as e:
            log.warning("insider_fetch_failed", symbol=symbol, error=str(e))
            return None

        if not tx_rows and not holder_rows:
            log.info("insider_data_not_found", symbol=symbol)
            return None

        transactions = [
            InsiderTransaction(
                filer_name=row.get("Insider") or "Unknown",
                filer_relation=row.get("Position") or "",
                text=row.get("Text") or row.get("Transaction") or "Transaction",
                shares=_int(row.get("Shares")),
                value=_float(row.get("Value")),
                start_date=_as_datetime(row.get("Start Date")),
            )
            for row in tx_rows
        ]
        holders = [
            InsiderHolder(
                name=row.get("Name") or "Unknown",
                relation=row.get("Position") or "",
                shares=_int(row.get("Shares Owned Directly")),
                latest_transaction_date=_as_datetime(row.get("Latest Transaction Date")),
            )
            for row in holder_rows
        ]
        return InsiderActivity(symbol=symbol, transactions=transactions, holders=holders)
