"""Tests for the SQLite repositories and migration runner."""

from datetime import UTC, datetime
from pathlib import Path

from storage.database import MIGRATIONS_DIR, Database
from storage.repositories.event_repo import EarningsEventRepository
from storage.repositories.watchlist_repo import WatchlistRepository


class TestMigrations:
    def test_migration_files_ordered(self):
        names = [f.name for f in sorted(MIGRATIONS_DIR.glob("*.sql"))]
        assert names[0].startswith("001_")
        assert names[1].startswith("002_")

    def test_applied_once(self):
        database = Database(":memory:")
        first = database.run_migrations()
        second = database.run_migrations()
        assert first == ["001_watchlist.sql", "002_earnings_events.sql"]
        assert second == []
        database.close()

    def test_tables_created(self, db):
        tables = {row["name"] for row in db.fetch("SELECT name FROM sqlite_master WHERE type = 'table'")}
        assert {"watchlist", "earnings_events", "_migrations"} <= tables

    def test_custom_directory(self, tmp_path: Path):
        (tmp_path / "001_a.sql").write_text("CREATE TABLE a (x INTEGER);")
        (tmp_path / "002_b.sql").write_text("CREATE TABLE b (y INTEGER);")
        database = Database(":memory:")
        assert database.run_migrations(tmp_path) == ["001_a.sql", "002_b.sql"]
        database.close()

    def test_file_database_survives_reopen(self, tmp_path: Path):
        path = str(tmp_path / "watchlist.db")
        first = Database(path)
        first.run_migrations()
        WatchlistRepository(first).add(1, "AAPL")
        first.close()

        second = Database(path)
        assert second.run_migrations() == []
        assert WatchlistRepository(second).get(1) == ["AAPL"]
        second.close()


class TestWatchlistRepository:
    def test_add_is_idempotent(self, db):
        repo = WatchlistRepository(db)
        assert repo.add(1, "AAPL") is True
        assert repo.add(1, "AAPL") is False
        assert db.fetchval("SELECT COUNT(*) FROM watchlist WHERE user_id = '1'") == 1

    def test_get_sorted(self, db):
        repo = WatchlistRepository(db)
        for s in ("TSLA", "AAPL", "NVDA"):
            repo.add(1, s)
        assert repo.get(1) == ["AAPL", "NVDA", "TSLA"]

    def test_remove(self, db):
        repo = WatchlistRepository(db)
        repo.add(1, "AAPL")
        assert repo.remove(1, "AAPL") is True
        assert repo.remove(1, "AAPL") is False
        assert repo.get(1) == []

    def test_clear_returns_removed(self, db):
        repo = WatchlistRepository(db)
        repo.add(1, "AAPL")
        repo.add(1, "MSFT")
        repo.add(2, "AAPL")
        assert repo.clear(1) == ["AAPL", "MSFT"]
        assert repo.get(1) == []
        assert repo.get(2) == ["AAPL"]
        assert repo.clear(1) == []

    def test_count_watchers(self, db):
        repo = WatchlistRepository(db)
        repo.add(1, "AAPL")
        repo.add(2, "AAPL")
        assert repo.count_watchers("AAPL") == 2
        assert repo.count_watchers("ZZZZ") == 0

    def test_all_symbols_unique(self, db):
        repo = WatchlistRepository(db)
        repo.add(1, "MSFT")
        repo.add(2, "MSFT")
        repo.add(2, "AAPL")
        assert repo.get_all_symbols() == ["AAPL", "MSFT"]


class TestEarningsEventRepository:
    def test_save_and_get(self, db):
        repo = EarningsEventRepository(db)
        start = datetime(2026, 10, 29, 21, 0, tzinfo=UTC)
        repo.save(777, "AAPL", 123456789012345678, start)

        record = repo.get(777, "AAPL")
        assert record is not None
        assert record.event_id == 123456789012345678
        assert record.start_time == start

    def test_scoped_by_guild(self, db):
        repo = EarningsEventRepository(db)
        repo.save(1, "AAPL", 10, datetime(2026, 10, 29, 21, tzinfo=UTC))
        assert repo.get(2, "AAPL") is None

    def test_save_replaces(self, db):
        repo = EarningsEventRepository(db)
        repo.save(1, "AAPL", 10, datetime(2026, 10, 29, 21, tzinfo=UTC))
        repo.save(1, "AAPL", 11, datetime(2026, 10, 30, 21, tzinfo=UTC))
        assert repo.get(1, "AAPL").event_id == 11

    def test_delete(self, db):
        repo = EarningsEventRepository(db)
        repo.save(1, "AAPL", 10, datetime(2026, 10, 29, 21, tzinfo=UTC))
        assert repo.delete(1, "AAPL") is True
        assert repo.delete(1, "AAPL") is False
        assert repo.get(1, "AAPL") is None
