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
Repository layer for the item record store.

Provides the abstract ItemStore interface and its PostgreSQL and SQLite
implementations, keeping SQL out of the sync services.
"""

from .database import create_item_store, get_database_type
from .item_store import ItemStore
from .sqlite_item_store import SqliteItemStore

__all__ = [
    "ItemStore",
    "SqliteItemStore",
    "create_item_store",
    "get_database_type",
]
