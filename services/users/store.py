"""
SQLite-backed user store.

Holds one row per bot user keyed by WhatsApp phone number. Wallets are not
stored here: WalletKit owns them and they are looked up by owner id.

Design:
- One table: users
- Columns: phone_number (primary key), display_name, created_at
- Connections are opened per operation; a ":memory:" database keeps a
  single shared connection so its contents survive between calls
"""

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, Optional

from .types import User

logger = logging.getLogger(__name__)


class UserStore:
    """Persistent lookup table of bot users."""

    def __init__(self, db_path: Optional[str] = None):
        """
        Args:
            db_path: Path to SQLite database file.
                    If None, uses ':memory:' (in-memory, useful for testing).
        """
        self.db_path = db_path or ":memory:"
        self._shared_conn: Optional[sqlite3.Connection] = None
        if self.db_path == ":memory:":
            self._shared_conn = sqlite3.connect(":memory:", check_same_thread=False)
        self._initialize_db()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        if self._shared_conn is not None:
            with self._shared_conn:
                yield self._shared_conn
            return

        conn = sqlite3.connect(self.db_path)
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def _initialize_db(self) -> None:
        """Create the schema if it does not exist yet."""
        with self._connect() as conn:
            if self._shared_conn is None:
                conn.execute("PRAGMA journal_mode=WAL")

            conn.execute("""
                CREATE TABLE IF NOT EXISTS users (
                    phone_number TEXT PRIMARY KEY,
                    display_name TEXT NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

        logger.debug(f"User store initialized: {self.db_path}")

    def get(self, phone_number: str) -> Optional[User]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT phone_number, display_name, created_at FROM users WHERE phone_number = ?",
                (phone_number,),
            ).fetchone()

        if row is None:
            return None
        return _row_to_user(row)

    def create(self, phone_number: str, display_name: str) -> Optional[User]:
        """
        Insert a new user.

        Returns:
            The created User, or None if the phone number is already registered.
        """
        with self._connect() as conn:
            cursor = conn.execute(
                "INSERT OR IGNORE INTO users (phone_number, display_name) VALUES (?, ?)",
                (phone_number, display_name),
            )
            created = cursor.rowcount == 1

        if not created:
            logger.debug(f"User already exists: {phone_number}")
            return None

        return self.get(phone_number)

    def delete(self, phone_number: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM users WHERE phone_number = ?", (phone_number,))
            return cursor.rowcount == 1

    def close(self) -> None:
        if self._shared_conn is not None:
            self._shared_conn.close()
            self._shared_conn = None


def _row_to_user(row: tuple) -> User:
    phone_number, display_name, created_at = row
    return User(
        phone_number=phone_number,
        display_name=display_name,
        created_at=datetime.fromisoformat(created_at) if created_at else None,
    )
