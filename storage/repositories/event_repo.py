"""Mapping of (guild, symbol) to the scheduled earnings event created for it."""

from dataclasses import dataclass
from datetime import datetime

from storage.database import Database


@dataclass(frozen=True)
class EventRecord:
    guild_id: int
    symbol: str
    event_id: int
    start_time: datetime


class EarningsEventRepository:
    def __init__(self, db: Database) -> None:
        self._db = db

    def get(self, guild_id: int, symbol: str) -> EventRecord | None:
        rows = self._db.fetch(
            "SELECT guild_id, symbol, event_id, start_time FROM earnings_events "
            "WHERE guild_id = ? AND symbol = ?",
            (str(guild_id), symbol),
        )
        if not rows:
            return None
        row = rows[0]
        return EventRecord(
            guild_id=int(row["guild_id"]),
            symbol=row["symbol"],
            event_id=int(row["event_id"]),
            start_time=datetime.fromisoformat(row["start_time"]),
        )

    def save(self, guild_id: int, symbol: str, event_id: int, start_time: datetime) -> None:
        self._db.execute(
            "INSERT OR REPLACE INTO earnings_events (guild_id, symbol, event_id, start_time) "
            "VALUES (?, ?, ?, ?)",
            (str(guild_id), symbol, str(event_id), start_time.isoformat()),
        )

    def delete(self, guild_id: int, symbol: str) -> bool:
        cursor = self._db.execute(
            "DELETE FROM earnings_events WHERE guild_id = ? AND symbol = ?",
            (str(guild_id), symbol),
        )
        return cursor.rowcount > 0
