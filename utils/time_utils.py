"""Date handling for prompts, replies and earnings events."""

from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from config.constants import (
    EARNINGS_EVENT_DURATION_MINUTES,
    EARNINGS_EVENT_HORIZON_DAYS,
    EARNINGS_EVENT_HOUR_UTC,
)

UTC = timezone.utc
PACIFIC = ZoneInfo("America/Los_Angeles")


def now_utc() -> datetime:
    return datetime.now(UTC)


def long_date(dt: datetime | None = None) -> str:
    """Human-readable long form, e.g. 'Saturday, October 17, 2026'."""
    dt = dt or datetime.now()
    return f"{dt:%A}, {dt:%B} {dt.day}, {dt.year}"


def short_date(value: date | datetime | None, tz: ZoneInfo | None = PACIFIC) -> str:
    """Compact form used in replies, e.g. 'Oct 17, 2026'."""
    if value is None:
        return "N/A"
    if isinstance(value, datetime) and tz is not None:
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        value = value.astimezone(tz)
    return f"{value:%b} {value.day}, {value.year}"


def format_transcript_timestamp(dt: datetime) -> str:
    """Timestamp prefix for flattened chat history lines."""
    return f"{dt.month}/{dt.day}/{dt.year}, {dt.hour % 12 or 12}:{dt:%M:%S %p}"


def earnings_event_window(report_date: date) -> tuple[datetime, datetime]:
    """Start/end of the scheduled event for an earnings report on report_date."""
    start = datetime.combine(report_date, time(EARNINGS_EVENT_HOUR_UTC), tzinfo=UTC)
    return start, start + timedelta(minutes=EARNINGS_EVENT_DURATION_MINUTES)


def within_event_horizon(start: datetime, now: datetime | None = None) -> bool:
    """True when start is in the future but no further out than the horizon."""
    now = now or now_utc()
    return now <= start <= now + timedelta(days=EARNINGS_EVENT_HORIZON_DAYS)
