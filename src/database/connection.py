"""
SQLite access for the trade engine.

One TradeDatabase wraps one lazily opened connection. schema.sql is applied
on construction (every statement is CREATE ... IF NOT EXISTS), so opening an
existing file is safe.

Usage:
    db = TradeDatabase(":memory:")
    with db.transaction() as conn:
        conn.execute("UPDATE campaigns SET settings = ? WHERE id = ?", ("{}", 1))
"""

import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, List, Optional


IN_MEMORY = ":memory:"
SCHEMA_FILE = Path(__file__).with_name("schema.sql")


class TradeDatabase:
    """
    Connection owner for trade engine tables.

    Single statements auto-commit through execute/executemany; use
    transaction() to group writes.
    """

    DEFAULT_PATH = "data/database/franchise/franchise.db"

    def __init__(self, db_path: Optional[str] = None):
        """
        Args:
            db_path: Database file, or ":memory:". Defaults to DEFAULT_PATH.
        """
        self.db_path = str(db_path or self.DEFAULT_PATH)
        self._conn: Optional[sqlite3.Connection] = None
        self._tx_lock = threading.RLock()
        self._tx_depth = 0

        if self.db_path != IN_MEMORY:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        self._apply_schema()

    def _apply_schema(self) -> None:
        if not SCHEMA_FILE.is_file():
            raise FileNotFoundError(f"Missing schema: {SCHEMA_FILE}")
        conn = self.get_connection()
        conn.executescript(SCHEMA_FILE.read_text(encoding="utf-8"))
        conn.commit()

    def get_connection(self) -> sqlite3.Connection:
        """Open on first use; rows come back as sqlite3.Row."""
        if self._conn is None:
            # Callers serialize access per campaign, so sharing across threads is allowed
            conn = sqlite3.connect(self.db_path, check_same_thread=False)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys = ON")
            if self.db_path != IN_MEMORY:
                conn.execute("PRAGMA journal_mode = WAL")
            self._conn = conn
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """
        Commit on success, roll back and re-raise on error.

        Blocks nest: only the outermost one commits or rolls back, so writes
        made through execute/executemany inside it land together or not at all.
        """
        with self._tx_lock:
            conn = self.get_connection()
            outermost = self._tx_depth == 0
            self._tx_depth += 1
            try:
                yield conn
            except Exception:
                if outermost:
                    conn.rollback()
                raise
            else:
                if outermost:
                    conn.commit()
            finally:
                self._tx_depth -= 1

    # ------------------------------------------------------------------
    # Statement helpers
    # ------------------------------------------------------------------

    def execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        """Run one write statement and commit. Cursor exposes lastrowid/rowcount."""
        with self.transaction() as conn:
            return conn.execute(sql, params)

    def executemany(self, sql: str, rows: Iterable[tuple]) -> sqlite3.Cursor:
        with self.transaction() as conn:
            return conn.executemany(sql, rows)

    def query_one(self, sql: str, params: tuple = ()) -> Optional[sqlite3.Row]:
        return self.get_connection().execute(sql, params).fetchone()

    def query_all(self, sql: str, params: tuple = ()) -> List[sqlite3.Row]:
        return self.get_connection().execute(sql, params).fetchall()

    def table_exists(self, table_name: str) -> bool:
        row = self.query_one(
            "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?",
            (table_name,)
        )
        return row is not None

    def __enter__(self) -> "TradeDatabase":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        conn = self._conn
        if conn is not None:
            if exc_type is None:
                conn.commit()
            else:
                conn.rollback()
        self.close()
        return False
