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
PostgreSQL implementation of the item record store.

Design principles:
- Raw SQL with parameter binding (no ORM)
- One connection per feed pass, in autocommit mode
- Explicit BEGIN/COMMIT only inside transaction()
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple

import psycopg2
import psycopg2.extras

from ..logging import get_logger
from ..models.episode import NewItem
from ..utils.exceptions import ItemWriteError, StoreError
from .item_store import SERIES_ITEM_CONSTRAINT, ItemStore, item_columns

logger = get_logger(__name__)


class PostgresItemStore(ItemStore):
    """
    PostgreSQL-based item store.

    Assumes the author, series, item and series_item tables already exist.
    """

    def __init__(self, database_url: str):
        """
        Initialize PostgreSQL item store.

        Args:
            database_url: PostgreSQL connection URL
        """
        self.database_url = database_url
        self._conn = None

    def connect(self) -> None:
        if self._conn is not None:
            return
        try:
            self._conn = psycopg2.connect(self.database_url)
        except psycopg2.Error as e:
            raise StoreError("Could not connect to PostgreSQL", error=str(e)) from e
        self._conn.autocommit = True
        logger.debug("Connected to PostgreSQL item store")

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    @contextmanager
    def _cursor(self):
        if self._conn is None:
            raise StoreError("PostgreSQL item store is not connected")
        with self._conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cursor:
            yield cursor

    @contextmanager
    def transaction(self) -> Iterator["PostgresItemStore"]:
        try:
            self._execute("BEGIN")
        except psycopg2.Error as e:
            raise ItemWriteError("Could not start transaction", error=str(e)) from e
        try:
            yield self
        except BaseException:
            self._rollback()
            raise
        try:
            self._execute("COMMIT")
        except psycopg2.Error as e:
            raise ItemWriteError("Could not commit transaction", error=str(e)) from e

    def _rollback(self) -> None:
        try:
            self._execute("ROLLBACK")
        except psycopg2.Error as e:
            raise ItemWriteError("Could not roll back transaction", error=str(e)) from e

    def _execute(self, statement: str) -> None:
        with self._cursor() as cursor:
            cursor.execute(statement)

    def get_authors(self) -> List[Tuple[int, str]]:
        try:
            with self._cursor() as cursor:
                cursor.execute("SELECT id, name FROM author")
                return [(row["id"], row["name"]) for row in cursor.fetchall()]
        except psycopg2.Error as e:
            raise StoreError("Could not read authors", error=str(e)) from e

    def get_series(self) -> List[Tuple[int, str]]:
        try:
            with self._cursor() as cursor:
                cursor.execute("SELECT id, title FROM series")
                return [(row["id"], row["title"]) for row in cursor.fetchall()]
        except psycopg2.Error as e:
            raise StoreError("Could not read series", error=str(e)) from e

    def find_item(self, filename: str, formatted_date: str) -> Optional[int]:
        try:
            with self._cursor() as cursor:
                cursor.execute(
                    """
                    SELECT id FROM item
                    WHERE filename = %s AND pub_date = %s
                    LIMIT 1
                    """,
                    (filename, formatted_date),
                )
                row = cursor.fetchone()
        except psycopg2.Error as e:
            raise StoreError("Could not look up item", filename=filename, pub_date=formatted_date, error=str(e)) from e
        return int(row["id"]) if row else None

    def insert_item(self, item: NewItem) -> Optional[int]:
        columns = item_columns(item)
        values = [getattr(item, column) for column in columns]
        placeholders = ", ".join(["%s"] * len(columns))
        sql = f"INSERT INTO item ({', '.join(columns)}) VALUES ({placeholders}) RETURNING id"

        try:
            with self._cursor() as cursor:
                cursor.execute(sql, values)
                row = cursor.fetchone()
        except psycopg2.Error as e:
            raise ItemWriteError("Could not insert item", filename=item.filename, error=str(e)) from e

        if not row:
            return None
        logger.debug("Inserted item", filename=item.filename, item_id=row["id"])
        return int(row["id"])

    def link_series_item(self, series_id: Optional[int], item_id: int) -> bool:
        try:
            with self._cursor() as cursor:
                cursor.execute(
                    f"""
                    INSERT INTO series_item (series_id, item_id)
                    VALUES (%s, %s)
                    ON CONFLICT ON CONSTRAINT {SERIES_ITEM_CONSTRAINT} DO NOTHING
                    """,
                    (series_id, item_id),
                )
                created = cursor.rowcount > 0
        except psycopg2.Error as e:
            raise ItemWriteError(
                "Could not link item to series", series_id=series_id, item_id=item_id, error=str(e)
            ) from e
        return created
