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
Abstract repository interface for the item record store.

The store owns one connection per feed pass. Every statement commits on its
own unless it runs inside transaction().
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple

from ..models.episode import NewItem

ITEM_COLUMNS = (
    "title",
    "description",
    "duration",
    "url",
    "date",
    "pub_date",
    "author_id",
    "filename",
    "url_type",
)

SERIES_ITEM_CONSTRAINT = "unique_series_and_item"


def item_columns(item: NewItem) -> Tuple[str, ...]:
    """Columns to insert for an item; co_authors only when the feed provides them."""
    if item.co_authors is None:
        return ITEM_COLUMNS
    return ITEM_COLUMNS + ("co_authors",)


class ItemStore(ABC):
    """
    Abstract record store for items, authors and series.

    Usage:
        with create_item_store(config) as store:
            authors = store.get_authors()
    """

    @abstractmethod
    def connect(self) -> None:
        """Open the connection used for the rest of the pass."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        pass

    @abstractmethod
    def get_authors(self) -> List[Tuple[int, str]]:
        """
        Read every author.

        Returns:
            List of (id, name) rows

        Raises:
            StoreError: If the query fails
        """
        pass

    @abstractmethod
    def get_series(self) -> List[Tuple[int, str]]:
        """
        Read every series.

        Returns:
            List of (id, title) rows

        Raises:
            StoreError: If the query fails
        """
        pass

    @abstractmethod
    def find_item(self, filename: str, formatted_date: str) -> Optional[int]:
        """
        Look up a persisted item by its dedup key.

        Args:
            filename: Episode filename (URL basename without extension)
            formatted_date: YYYY-M-D publish date, matched against item.pub_date

        Returns:
            Item id if a row exists, None otherwise

        Raises:
            StoreError: If the query fails
        """
        pass

    @abstractmethod
    def insert_item(self, item: NewItem) -> Optional[int]:
        """
        Insert one item row.

        Returns:
            Generated item id, or None if the store returned no row

        Raises:
            ItemWriteError: If the insert fails
        """
        pass

    @abstractmethod
    def link_series_item(self, series_id: Optional[int], item_id: int) -> bool:
        """
        Associate an item with a series, ignoring an existing identical link.

        Returns:
            True if a new link row was written, False if it already existed

        Raises:
            ItemWriteError: If the insert fails for any other reason
        """
        pass

    @abstractmethod
    @contextmanager
    def transaction(self) -> Iterator["ItemStore"]:
        """
        Run the enclosed statements atomically.

        Commits when the block exits normally; rolls back and re-raises otherwise.
        """
        pass

    def __enter__(self) -> "ItemStore":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
