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
Pytest fixtures for castsync tests.

Provides configuration pointing at a temporary database and a connected
SQLite item store seeded with authors and series.
"""

from typing import Dict

import pytest

from castsync.repositories.sqlite_item_store import SqliteItemStore
from castsync.utils.config import Config
from tests.feed_builders import ALIASED_SERIES_TITLE, ENCLOSURE_SHOW_TITLE, SHOW_TITLE
from tests.store_helpers import add_author, add_series


@pytest.fixture
def config(tmp_path) -> Config:
    """Configuration pointing at a temporary SQLite database."""
    return Config(
        feed_urls=["https://example.com/feed.xml"],
        database_path=str(tmp_path / "castsync.db"),
    )


@pytest.fixture
def store(config):
    """Connected SQLite store with the schema created."""
    item_store = SqliteItemStore(config.database_path)
    item_store.connect()
    yield item_store
    item_store.close()


@pytest.fixture
def seed(store) -> Dict[str, int]:
    """Seed authors and series, returning name/title -> id."""
    ids = {}
    for name in ("J. Smith", "Cheryl Brodersen", "Jane Doe"):
        ids[name] = add_author(store, name)
    for title in (SHOW_TITLE, ENCLOSURE_SHOW_TITLE, ALIASED_SERIES_TITLE):
        ids[title] = add_series(store, title)
    return ids
