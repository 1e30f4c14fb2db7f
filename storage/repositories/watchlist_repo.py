"""Watchlist repository."""

import structlog

from storage.database import Database

log = structlog.get_logger(__name__)


class WatchlistRepository:
    def __init__(self, db: Database) -> None:
        self._db = db

    def get(self, user_id: int) -> list[str]:
        """User's symbols in alphabetical order."""
        rows = self._db.fetch(
            "SELECT symbol FROM watchlist WHERE user_id = ? ORDER BY symbol",
            (str(user_id),),
        )
        return [row["symbol"] for row in rows]

    def add(self, user_id: int, symbol: str) -> bool:
        """Add a symbol. Returns False if it was already on the watchlist."""
        cursor = self._db.execute(
            "INSERT OR IGNORE INTO watchlist (user_id, symbol) VALUES (?, ?)",
            (str(user_id), symbol.upper()),
        )
        added = cursor.rowcount > 0
        log.info("watchlist_add", user_id=user_id, symbol=symbol, added=added)
        return added

    def remove(self, user_id: int, symbol: str) -> bool:
        """Remove a symbol. Returns True if it was removed."""
        cursor = self._db.execute(
            "DELETE FROM watchlist WHERE user_id = ? AND symbol = ?",
            (str(user_id), symbol.upper()),
        )
        removed = cursor.rowcount > 0
        log.info("watchlist_remove", user_id=user_id, symbol=symbol, removed=removed)
        return removed

    def clear(self, user_id: int) -> list[str]:
        """Remove every symbol for a user. Returns the symbols that were removed."""
        symbols = self.get(user_id)
        if symbols:
            self._db.execute("DELETE FROM watchlist WHERE user_id = ?", (str(user_id),))
        log.info("watchlist_clear", user_id=user_id, removed=len(symbols))
        return symbols

    def count_watchers(self, symbol: str) -> int:
        """Number of users holding symbol on their watchlist."""
        count = self._db.fetchval(
            "SELECT COUNT(*) FROM watchlist WHERE symbol = ?", (symbol.upper(),)
        )
        return int(count or 0)

    def get_all_symbols(self) -> list[str]:
        """Unique symbols across all users' watchlists."""
        rows = self._db.fetch("SELECT DISTINCT symbol FROM watchlist ORDER BY symbol")
        return [row["symbol"] for row in rows]
