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
Database factory for creating item store instances.

Supports both SQLite (local development) and PostgreSQL (deployment).
Selection is based on the DATABASE_URL setting:
- If DATABASE_URL starts with "postgresql://" or "postgres://", use PostgreSQL
- Otherwise, use SQLite with DATABASE_PATH

Usage:
    from castsync.repositories.database import create_item_store

    with create_item_store(config) as store:
        store.get_authors()
"""

from typing import TYPE_CHECKING
from urllib.parse import urlparse

from ..logging import get_logger
from .item_store import ItemStore

if TYPE_CHECKING:
    from ..utils.config import Config

logger = get_logger(__name__)


def get_database_type(database_url: str) -> str:
    """
    Determine database type from URL.

    Args:
        database_url: Database connection string or path

    Returns:
        'postgresql' or 'sqlite'
    """
    if not database_url:
        return "sqlite"

    parsed = urlparse(database_url)

    if parsed.scheme in ("postgresql", "postgres"):
        return "postgresql"
    elif parsed.scheme in ("sqlite", ""):
        return "sqlite"
    else:
        logger.warning("Unknown database scheme, defaulting to SQLite", scheme=parsed.scheme)
        return "sqlite"


def mask_database_url(database_url: str) -> str:
    """Hide the password of a connection URL for logging."""
    parsed = urlparse(database_url)
    if not parsed.password:
        return database_url
    return f"{parsed.scheme}://{parsed.username}:***@{parsed.hostname}:{parsed.port}{parsed.path}"


def create_item_store(config: "Config") -> ItemStore:
    """
    Create an (unconnected) item store based on configuration.

    Args:
        config: Application configuration

    Returns:
        ItemStore; use it as a context manager to connect and close

    Raises:
        ImportError: If PostgreSQL driver not installed when needed
    """
    db_type = get_database_type(config.database_url)

    if db_type == "postgresql":
        try:
            from .postgres_item_store import PostgresItemStore
        except ImportError as e:
            raise ImportError("PostgreSQL support requires psycopg2. Install with: pip install psycopg2-binary") from e

        logger.info("Using PostgreSQL database", database_url=mask_database_url(config.database_url))
        return PostgresItemStore(database_url=config.database_url)

    from .sqlite_item_store import SqliteItemStore

    db_path = config.database_path
    if config.database_url.startswith("sqlite:///"):
        db_path = config.database_url[len("sqlite:///") :]

    logger.info("Using SQLite database", db_path=db_path)
    return SqliteItemStore(db_path=db_path)
