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

"""Tests for PostgresItemStore transaction handling, using a mocked connection."""

from unittest.mock import MagicMock

import psycopg2
import pytest

from castsync.repositories.postgres_item_store import PostgresItemStore
from castsync.utils.exceptions import ItemWriteError


def store_with_failing(statement: str):
    """Store on a mocked connection where executing `statement` raises."""
    conn = MagicMock()
    cursor = conn.cursor.return_value.__enter__.return_value

    def execute(sql, *args):
        if sql == statement:
            raise psycopg2.OperationalError("server closed the connection unexpectedly")

    cursor.execute.side_effect = execute
    store = PostgresItemStore("postgresql://sync:pw@localhost:5432/items")
    store._conn = conn
    return store, cursor


class TestTransaction:
    def test_commit(self):
        store, cursor = store_with_failing("")

        with store.transaction():
            pass

        statements = [call.args[0] for call in cursor.execute.call_args_list]
        assert statements == ["BEGIN", "COMMIT"]

    def test_rollback_on_error(self):
        store, cursor = store_with_failing("")

        with pytest.raises(ItemWriteError, match="Could not insert item"):
            with store.transaction():
                raise ItemWriteError("Could not insert item")

        statements = [call.args[0] for call in cursor.execute.call_args_list]
        assert statements == ["BEGIN", "ROLLBACK"]

    def test_failed_rollback_is_wrapped(self):
        """Test that a broken connection during rollback surfaces as an item write failure."""
        store, _ = store_with_failing("ROLLBACK")

        with pytest.raises(ItemWriteError, match="Could not roll back transaction") as exc_info:
            with store.transaction():
                raise ItemWriteError("Could not insert item")

        assert isinstance(exc_info.value.__cause__, psycopg2.OperationalError)

    def test_failed_commit_is_wrapped(self):
        store, _ = store_with_failing("COMMIT")

        with pytest.raises(ItemWriteError, match="Could not commit transaction"):
            with store.transaction():
                pass
