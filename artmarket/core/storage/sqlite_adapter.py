import sqlite3
import threading
from pathlib import Path
from typing import List, Optional, Tuple

from artmarket.utils.logger import get_logger

logger = get_logger("storage.sqlite")


class SQLiteAdapter:
    """
    SQLite backend for persistent storage.

    Stores serialized entities in a single table partitioned by bucket
    (one bucket per entity kind). Rows keep their insertion order across
    updates so listings are stable.
    """

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self._conn_local = threading.local()

        if not self.db_path.parent.exists():
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._init_schema()

    def _get_conn(self) -> sqlite3.Connection:
        """Get or create connection for current thread."""
        if not hasattr(self._conn_local, "conn"):
            self._conn_local.conn = sqlite3.connect(
                self.db_path,
                timeout=30.0,
                check_same_thread=False
            )
            self._conn_local.conn.row_factory = sqlite3.Row
            self._conn_local.conn.execute("PRAGMA journal_mode=WAL;")
            self._conn_local.conn.execute("PRAGMA synchronous=NORMAL;")
        return self._conn_local.conn

    def _init_schema(self):
        """Initialize database schema."""
        conn = self._get_conn()
        with conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS entities (
                    bucket TEXT NOT NULL,
                    key TEXT NOT NULL,
                    value TEXT NOT NULL,
                    PRIMARY KEY (bucket, key)
                )
            """)

            conn.execute("""
                CREATE TABLE IF NOT EXISTS market_meta (
                    key TEXT PRIMARY KEY,
                    value TEXT
                )
            """)

    def close(self):
        """Close the connection owned by the current thread."""
        conn = getattr(self._conn_local, "conn", None)
        if conn is not None:
            conn.close()
            del self._conn_local.conn

    # =========================================================================
    # Entity Operations
    # =========================================================================

    _UPSERT = (
        "INSERT INTO entities (bucket, key, value) VALUES (?, ?, ?) "
        "ON CONFLICT(bucket, key) DO UPDATE SET value = excluded.value"
    )

    def put(self, bucket: str, key: str, value: str):
        """Insert or update one entity."""
        conn = self._get_conn()
        with conn:
            conn.execute(self._UPSERT, (bucket, key, value))

    def put_many(self, items: List[Tuple[str, str, str]]):
        """
        Atomically write several entities.

        Args:
            items: List of (bucket, key, value)
        """
        conn = self._get_conn()
        with conn:
            conn.executemany(self._UPSERT, items)

    def get(self, bucket: str, key: str) -> Optional[str]:
        """Get value by bucket and key."""
        conn = self._get_conn()
        cursor = conn.execute(
            "SELECT value FROM entities WHERE bucket = ? AND key = ?", (bucket, key)
        )
        row = cursor.fetchone()
        return row['value'] if row else None

    def values(self, bucket: str) -> List[str]:
        """Get all values in a bucket, in insertion order."""
        conn = self._get_conn()
        cursor = conn.execute(
            "SELECT value FROM entities WHERE bucket = ? ORDER BY rowid ASC", (bucket,)
        )
        return [row['value'] for row in cursor]

    def count(self, bucket: str) -> int:
        conn = self._get_conn()
        cursor = conn.execute("SELECT COUNT(*) as cnt FROM entities WHERE bucket = ?", (bucket,))
        return cursor.fetchone()['cnt']

    # =========================================================================
    # Metadata Operations
    # =========================================================================

    def set_meta(self, key: str, value: str):
        conn = self._get_conn()
        with conn:
            conn.execute("INSERT OR REPLACE INTO market_meta (key, value) VALUES (?, ?)", (key, value))

    def get_meta(self, key: str) -> Optional[str]:
        conn = self._get_conn()
        cursor = conn.execute("SELECT value FROM market_meta WHERE key = ?", (key,))
        row = cursor.fetchone()
        return row['value'] if row else None
