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
Feed sync service - runs the whole pipeline for configured feeds.

Per feed: fetch and parse, select the dialect, normalize entries, select
the latest batch, then (only if the batch is not empty) connect to the
store, load reference data and sync the batch.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ..core.batch import select_batch
from ..core.feed_source import FeedSource
from ..core.normalizer import normalize_entries
from ..logging import get_logger
from ..models.dialect import Dialect, select_dialect
from ..models.episode import Episode
from ..models.sync import FeedFailure, FeedRunSummary, SyncResult
from ..repositories.database import create_item_store
from ..repositories.item_store import ItemStore
from ..utils.config import Config
from ..utils.exceptions import CastsyncError, ConfigurationError
from .reference_loader import load_reference_maps
from .sync_engine import SyncEngine

logger = get_logger(__name__)


@dataclass
class PreparedFeed:
    """A fetched feed, normalized and windowed, before touching the store."""

    feed_url: str
    channel_title: str
    dialect: Dialect
    episodes: List[Episode] = field(default_factory=list)
    batch: List[Episode] = field(default_factory=list)


class FeedSyncService:
    """
    Service for syncing podcast feeds into the item store.

    Feeds are processed one at a time and episodes one at a time; a store
    connection is opened per feed and closed when that feed is done.
    """

    def __init__(
        self,
        config: Config,
        feed_source: Optional[FeedSource] = None,
        store_factory: Optional[Callable[[], ItemStore]] = None,
    ):
        """
        Initialize feed sync service.

        Args:
            config: Application configuration
            feed_source: Feed fetcher/parser (defaults to an HTTP FeedSource)
            store_factory: Callable returning an unconnected ItemStore
        """
        self.config = config
        self.feed_source = feed_source or FeedSource(timeout=config.request_timeout)
        self.store_factory = store_factory or (lambda: create_item_store(config))

    def prepare(self, feed_url: str) -> PreparedFeed:
        """
        Fetch, parse, normalize and window one feed.

        Raises:
            FeedFetchError: If the feed cannot be downloaded
            FeedParseError: If the document is not a usable feed
        """
        parsed = self.feed_source.load(feed_url)
        dialect = select_dialect(parsed.channel_title, self.config.enclosure_show_title, self.config.primary_author)
        logger.info("Processing items", feed_url=feed_url, channel_title=parsed.channel_title, dialect=dialect.kind)

        episodes = normalize_entries(parsed.entries, dialect)
        batch = select_batch(episodes, self.config.batch_size)
        return PreparedFeed(
            feed_url=feed_url,
            channel_title=parsed.channel_title,
            dialect=dialect,
            episodes=episodes,
            batch=batch,
        )

    def sync_feed(self, feed_url: str, dry_run: bool = False) -> SyncResult:
        """
        Sync one feed.

        Args:
            feed_url: Feed URL
            dry_run: Check for existing items without writing

        Returns:
            SyncResult for the feed (empty when the feed has no items)

        Raises:
            FeedFetchError, FeedParseError: If the feed cannot be read
            ReferenceDataError: If author/series lookups cannot be loaded
        """
        prepared = self.prepare(feed_url)

        if not prepared.batch:
            logger.info("No items to parse", feed_url=feed_url)
            return SyncResult(feed_url=feed_url, channel_title=prepared.channel_title)

        with self.store_factory() as store:
            reference_maps = load_reference_maps(store, self.config.series_aliases)
            engine = SyncEngine(
                store=store,
                reference_maps=reference_maps,
                dialect=prepared.dialect,
                channel_title=prepared.channel_title,
                abort_on_empty_insert=self.config.abort_on_empty_insert,
                dry_run=dry_run,
            )
            return engine.sync(prepared.batch, feed_url=feed_url)

    def sync_all(self, feed_urls: Optional[List[str]] = None, dry_run: bool = False) -> FeedRunSummary:
        """
        Sync every configured feed in turn.

        A feed that fails to fetch, parse or load reference data is recorded
        as a failure and the run moves on to the next feed.

        Raises:
            ConfigurationError: If no feed URLs are configured or given
        """
        urls = feed_urls if feed_urls else self.config.feed_urls
        if not urls:
            raise ConfigurationError("No feed URLs configured. Set FEED_URLS or pass --feed-url.")

        summary = FeedRunSummary()
        for feed_url in urls:
            try:
                summary.results.append(self.sync_feed(feed_url, dry_run=dry_run))
            except CastsyncError as e:
                logger.error("Feed sync failed", feed_url=feed_url, error=str(e))
                summary.failures.append(FeedFailure(feed_url=feed_url, error=str(e)))

        logger.info("Sync run complete", feeds=len(urls), failed_feeds=len(summary.failures))
        return summary
