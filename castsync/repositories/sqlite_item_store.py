# Copyright 2025 thestill.me
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
SQLite implementation of the item record store.

Used for local development and tests. Creates the same schema the
PostgreSQL deployment provides, so sync behaviour (dedup, foreign keys,
conflict-ignored series links) is identical.

Design principles:
- Raw SQL with parameter binding (no ORM)
- One connection per feed pass, in autocommit mode
- Explicit BEGIN/COMMIT only inside transaction()
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from ..logging import get_logger
from ..models.episode import NewItem
from ..utils.exceptions import ItemWriteError, StoreError
from .item_store import SERIES_ITEM_CONSTRAINT, ItemStore, item_columns

logger = get_logger(__name__)


class SqliteItemStore(ItemStore):
    """
    SQLite-based item store.

    Schema is created on connect if missing.
    """

    def __init__(self, db_path: str):
        """
        Initialize SQLite item store.

        Args:
            db_path: Path to SQLite database file (e.g., "./data/castsync.db")
        """
        self.db_path = Path(db_path)
        self._conn: Optional[sqlite3.Connection] = None

    def connect(self) -> None:
        if self._conn is not None:
            return
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            conn = sqlite3.connect(str(self.db_path), isolation_level=None)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys = ON")
            self._create_schema(conn)
        except sqlite3.Error as e:
            raise StoreError("Could not open SQLite database", db_path=str(self.db_path), error=str(e)) from e
        self._conn = conn
        logger.debug("Connected to SQLite item store", db_path=str(self.db_path))

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _create_schema(self, conn: sqlite3.Connection):
        """Create database schema (idempotent)."""
        conn.executescript(
            f"""
            CREATE TABLE IF NOT EXISTS author (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL UNIQUE
            );

            CREATE TABLE IF NOT EXISTS series (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL UNIQUE
            );

            CREATE TABLE IF NOT EXISTS item (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                description TEXT NULL,
                duration INTEGER NULL,
                url TEXT NOT NULL,
                date TEXT NOT NULL,
                pub_date TEXT NOT NULL,
                author_id INTEGER NOT NULL,
                filename TEXT NOT NULL,
                url_type TEXT NOT NULL,
                co_authors TEXT NULL,
                FOREIGN KEY (author_id) REFERENCES author(id)
            );

            CREATE INDEX IF NOT EXISTS idx_item_filename_pub_date ON item(filename, pub_date);

            CREATE TABLE IF NOT EXISTS series_item (
                series_id INTEGER NOT NULL,
                item_id INTEGER NOT NULL,
                FOREIGN KEY (series_id) REFERENCES series(id),
                FOREIGN KEY (item_id) REFERENCES item(id),
                CONSTRAINT {SERIES_ITEM_CONSTRAINT} UNIQUE (series_id, item_id)
            );
            """
        )

    def _require_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreError("SQLite item store is not connected", db_path=str(self.db_path))
        return self._conn

    @contextmanager
    def transaction(self) -> Iterator["SqliteItemStore"]:
        conn = self._require_connection()
        try:
            conn.execute("BEGIN")
        except sqlite3.Error as e:
            raise ItemWriteError("Could not start transaction", error=str(e)) from e
        try:
            yield self
        except BaseException:
            self._rollback(conn)
            raise
        try:
            conn.execute("COMMIT")
        except sqlite3.Error as e:
            self._rollback(conn)
            raise ItemWriteError("Could not commit transaction", error=str(e)) from e

    def _rollback(self, conn: sqlite3.Connection) -> None:
        try:
            conn.execute("ROLLBACK")
        except sqlite3.Error as e:
            raise ItemWriteError("Could not roll back transaction", error=str(e)) from e

    def get_authors(self) -> List[Tuple[int, str]]:
        try:
            cursor = self._require_connection().execute("SELECT id, name FROM author")
            return [(row["id"], row["name"]) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            raise StoreError("Could not read authors", error=str(e)) from e

    def get_series(self) -> List[Tuple[int, str]]:
        try:
            cursor = self._require_connection().execute("SELECT id, title FROM series")
            return [(row["id"], row["title"]) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            raise StoreError("Could not read series", error=str(e)) from e

    def find_item(self, filename: str, formatted_date: str) -> Optional[int]:
        try:
            cursor = self._require_connection().execute(
                """
                SELECT id FROM item
                WHERE filename = ? AND pub_date = ?
                LIMIT 1
                """,
                (filename, formatted_date),
            )
            row = cursor.fetchone()
        except sqlite3.Error as e:
            raise StoreError("Could not look up item", filename=filename, pub_date=formatted_date, error=str(e)) from e
        return int(row["id"]) if row else None

    def insert_item(self, item: NewItem) -> Optional[int]:
        columns = item_columns(item)
        values = [getattr(item, column) for column in columns]
        placeholders = ", ".join(["?"] * len(columns))
        sql = f"INSERT INTO item ({', '.join(columns)}) VALUES ({placeholders}) RETURNING id"

        try:
            cursor = self._require_connection().execute(sql, values)
            row = cursor.fetchone()
            cursor.close()
        except sqlite3.Error as e:
            raise ItemWriteError("Could not insert item", filename=item.filename, error=str(e)) from e

        if not row:
            return None
        logger.debug("Inserted item", filename=item.filename, item_id=row["id"])
        return int(row["id"])

    def link_series_item(self, series_id: Optional[int], item_id: int) -> bool:
        try:
            cursor = self._require_connection().execute(
                """
                INSERT INTO series_item (series_id, item_id)
                VALUES (?, ?)
                ON CONFLICT (series_id, item_id) DO NOTHING
                """,
                (series_id, item_id),
            )
        except sqlite3.Error as e:
            raise ItemWriteError(
                "Could not link item to series", series_id=series_id, item_id=item_id, error=str(e)
            ) from e
        return cursor.rowcount > 0
