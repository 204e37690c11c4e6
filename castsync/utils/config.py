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

import os
from typing import Dict, List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .exceptions import ConfigurationError

DEFAULT_ENCLOSURE_SHOW_TITLE = "Women Worth Knowing"
DEFAULT_PRIMARY_AUTHOR = "Cheryl Brodersen"
DEFAULT_SERIES_ALIASES: Dict[str, List[str]] = {"Back to Basics Radio": ["Back to Basics"]}


class Config(BaseModel):
    # Feeds
    feed_urls: List[str] = Field(default_factory=list)
    request_timeout: int = 30

    # Storage
    database_url: str = ""  # postgresql://... selects PostgreSQL
    database_path: str = "./data/castsync.db"  # SQLite fallback

    # Sync behaviour
    batch_size: int = 10
    abort_on_empty_insert: bool = False

    # Feed dialects
    enclosure_show_title: str = DEFAULT_ENCLOSURE_SHOW_TITLE  # Channel title using enclosure URLs
    primary_author: str = DEFAULT_PRIMARY_AUTHOR  # Primary author for that show
    series_aliases: Dict[str, List[str]] = Field(default_factory=lambda: dict(DEFAULT_SERIES_ALIASES))


def parse_feed_urls(raw: Optional[str]) -> List[str]:
    """Split a comma or newline separated list of feed URLs."""
    if not raw:
        return []
    candidates = raw.replace("\n", ",").split(",")
    return [url.strip() for url in candidates if url.strip()]


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer", value=raw) from e
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive", value=raw)
    return value


def load_config(env_file: Optional[str] = None) -> Config:
    """Load configuration from environment variables and .env file"""
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    config_data = {
        "feed_urls": parse_feed_urls(os.getenv("FEED_URLS")),
        "request_timeout": _int_env("CASTSYNC_REQUEST_TIMEOUT", 30),
        "database_url": os.getenv("DATABASE_URL", ""),
        "database_path": os.getenv("DATABASE_PATH", "./data/castsync.db"),
        "batch_size": _int_env("CASTSYNC_BATCH_SIZE", 10),
        "abort_on_empty_insert": os.getenv("CASTSYNC_ABORT_ON_EMPTY_INSERT", "false").lower() == "true",
        "enclosure_show_title": os.getenv("CASTSYNC_ENCLOSURE_SHOW_TITLE", DEFAULT_ENCLOSURE_SHOW_TITLE).strip(),
        "primary_author": os.getenv("CASTSYNC_PRIMARY_AUTHOR", DEFAULT_PRIMARY_AUTHOR).strip(),
    }

    return Config(**config_data)

