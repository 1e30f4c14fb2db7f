"""SQLite connection manager and migration runner."""

import sqlite3
from pathlib import Path

import structlog

log = structlog.get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent / "migrations"


class Database:
    """Owns the single SQLite connection used by all repositories.

    Queries are short and run on the event loop thread; the table constraints
    carry correctness under interleaved handlers.
    """

    def __init__(self, path: str = ":memory:") -> None:
        self.path = path
        self.connection = sqlite3.connect(path, timeout=10.0)
        self.connection.row_factory = sqlite3.Row
        if path != ":memory:":
            self.connection.execute("PRAGMA journal_mode=WAL")
        log.info("database_opened", path=path)

    def execute(self, query: str, params: tuple = ()) -> sqlite3.Cursor:
        """Run a write statement in its own transaction."""
        with self.connection:
            return self.connection.execute(query, params)

    def fetch(self, query: str, params: tuple = ()) -> list[sqlite3.Row]:
        return self.connection.execute(query, params).fetchall()

    def fetchval(self, query: str, params: tuple = ()) -> object | None:
        row = self.connection.execute(query, params).fetchone()
        return row[0] if row else None

    def close(self) -> None:
        self.connection.close()
        log.info("database_closed", path=self.path)

    def run_migrations(self, migrations_dir: Path = MIGRATIONS_DIR) -> list[str]:
        """Apply unapplied *.sql files in name order. Returns the applied names."""
        with self.connection:
            self.connection.execute("""
                CREATE TABLE IF NOT EXISTS _migrations (
                    filename TEXT PRIMARY KEY,
                    applied_at DATETIME DEFAULT CURRENT_TIMESTAMP
                )
            """)

        applied = {row["filename"] for row in self.fetch("SELECT filename FROM _migrations")}

        newly_applied = []
        for migration_file in sorted(migrations_dir.glob("*.sql")):
            if migration_file.name in applied:
                continue

            log.info("applying_migration", filename=migration_file.name)
            # executescript commits on its own, so record the file right after
            self.connection.executescript(migration_file.read_text())
            self.execute("INSERT INTO _migrations (filename) VALUES (?)", (migration_file.name,))
            newly_applied.append(migration_file.name)
            log.info("migration_applied", filename=migration_file.name)

        return newly_applied
