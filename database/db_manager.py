import json
import os
import sqlite3

from loguru import logger

from services.errors import StorageError
from utils.constants import DB_FILE, DEFAULT_CURRENCY_SYMBOL


class DatabaseManager:
    """SQLite-backed key-value store for the ledger, the catalog and preferences."""

    def __init__(self, db_path: str | None = None):
        self.db_path = db_path or DB_FILE
        self._conn: sqlite3.Connection | None = None

    def get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = sqlite3.connect(self.db_path)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA journal_mode = WAL")
        return self._conn

    def initialize(self):
        """Create schema and seed defaults."""
        conn = self.get_connection()
        self._create_schema(conn)
        self._seed_defaults(conn)
        conn.commit()

    def _create_schema(self, conn: sqlite3.Connection):
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS kv_store (
                key   TEXT PRIMARY KEY,
                value TEXT NOT NULL
            );

            CREATE TABLE IF NOT EXISTS app_settings (
                key   TEXT PRIMARY KEY,
                value TEXT NOT NULL
            );
        """)

    def _seed_defaults(self, conn: sqlite3.Connection):
        defaults = [
            ("appearance_mode", "system"),
            ("currency_symbol", DEFAULT_CURRENCY_SYMBOL),
            ("date_format", "MM/DD/YYYY"),
        ]
        for key, value in defaults:
            conn.execute(
                "INSERT OR IGNORE INTO app_settings(key, value) VALUES (?, ?)",
                (key, value),
            )

    # ── Data keys ─────────────────────────────────────────────────────────────

    def get_json(self, key: str, default=None):
        """Decoded value for key; default when absent or unreadable."""
        row = self.get_connection().execute(
            "SELECT value FROM kv_store WHERE key = ?", (key,)
        ).fetchone()
        if row is None:
            return default
        try:
            return json.loads(row["value"])
        except ValueError:
            logger.warning(f"Stored value for '{key}' is not valid JSON; using default")
            return default

    def set_json(self, key: str, value) -> None:
        conn = self.get_connection()
        try:
            conn.execute(
                "INSERT OR REPLACE INTO kv_store(key, value) VALUES (?, ?)",
                (key, json.dumps(value, ensure_ascii=False)),
            )
            conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Failed to write '{key}' to {self.db_path}: {e}")
            raise StorageError(f"Could not save {key}: {e}") from e

    # ── Preferences ───────────────────────────────────────────────────────────

    def get_setting(self, key: str, default: str = "") -> str:
        conn = self.get_connection()
        row = conn.execute(
            "SELECT value FROM app_settings WHERE key = ?", (key,)
        ).fetchone()
        return row["value"] if row else default

    def set_setting(self, key: str, value: str):
        conn = self.get_connection()
        try:
            conn.execute(
                "INSERT OR REPLACE INTO app_settings(key, value) VALUES (?, ?)",
                (key, value),
            )
            conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Failed to save setting '{key}': {e}")
            raise StorageError(f"Could not save setting {key}: {e}") from e

    @staticmethod
    def open_default(data_folder: str | None = None) -> "DatabaseManager":
        """Startup factory: opens monivera.db in data_folder (or CWD)."""
        if data_folder:
            os.makedirs(data_folder, exist_ok=True)
            path = os.path.join(data_folder, DB_FILE)
        else:
            path = DB_FILE
        db = DatabaseManager(path)
        db.initialize()
        logger.info(f"Opened data file {path}")
        return db

    def close(self):
        if self._conn:
            self._conn.close()
            self._conn = None
