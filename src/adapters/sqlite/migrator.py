import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"


class SQLiteMigrator:
    """Applies pending ``*.sql`` files in name order, once each."""

    def __init__(self, db_path: str, migrations_dir: str | Path = DEFAULT_MIGRATIONS_DIR):
        self.db_path = db_path
        self.migrations_dir = Path(migrations_dir)

    def _get_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    def _ensure_migration_table(self, conn: sqlite3.Connection) -> None:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS _migrations (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                filename TEXT UNIQUE NOT NULL,
                applied_at DATETIME DEFAULT CURRENT_TIMESTAMP
            );
        """)

    def _applied(self, conn: sqlite3.Connection) -> set[str]:
        return {row[0] for row in conn.execute("SELECT filename FROM _migrations")}

    def _up_script(self, path: Path) -> str:
        # Everything before "-- Down" is the forward migration
        return path.read_text().split("-- Down")[0]

    def run_migrations(self) -> list[str]:
        """Apply all pending migrations and return their filenames."""
        conn = self._get_connection()
        applied_now = []
        try:
            self._ensure_migration_table(conn)
            applied = self._applied(conn)
            for path in sorted(self.migrations_dir.glob("*.sql")):
                if path.name in applied:
                    continue
                logger.info("Applying migration: %s", path.name)
                try:
                    conn.executescript(self._up_script(path))
                    conn.execute("INSERT INTO _migrations (filename) VALUES (?)", (path.name,))
                    conn.commit()
                except sqlite3.Error as e:
                    conn.rollback()
                    raise RuntimeError(f"Migration {path.name} failed: {e}") from e
                applied_now.append(path.name)
        finally:
            conn.close()
        return applied_now
