"""Normalized market data records."""

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass(frozen=True)
class QuoteSnapshot:
    symbol: str
    name: str
    price: float | None
    change: float | None = None
    change_percent: float | None = None
    day_high: float | None = None
    day_low: float | None = None
    fifty_two_week_high: float | None = None
    fifty_two_week_low: float | None = None
    volume: int | None = None
    market_cap: float | None = None


@dataclass(frozen=True)
class EarningsDate:
    symbol: str
    report_date: date
    is_estimate: bool = True
    eps_average: float | None = None
    eps_low: float | None = None
    eps_high: float | None = None
    revenue_average: float | None = None
    revenue_low: float | None = None
    revenue_high: float | None = None


@dataclass(frozen=True)
class EarningsQuarter:
    label: str
    eps_actual: float | None
    eps_estimate: float | None
    surprise_percent: float | None = None  # fraction, 0.05 == 5%


@dataclass(frozen=True)
class EarningsHistory:
    symbol: str
    quarters: list[EarningsQuarter] = field(default_factory=list)  # newest first


@dataclass(frozen=True)
class InsiderTransaction:
    filer_name: str
    filer_relation: str
    text: str
    shares: int | None
    value: float | None
    start_date: datetime | date | None


@dataclass(frozen=True)
class InsiderHolder:
    name: str
    relation: str
    shares: int | None
    latest_transaction_date: datetime | date | None


@dataclass(frozen=True)
class InsiderActivity:
    symbol: str
    transactions: list[InsiderTransaction] = field(default_factory=list)
    holders: list[InsiderHolder] = field(default_factory=list)
