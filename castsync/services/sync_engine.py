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
Sync engine - writes new episodes and their series links.

For each episode of a batch, in order:
1. Look the episode up by its dedup key (filename, formatted date); skip if found
2. Assemble item columns for the feed's dialect
3. Insert the item and link it to the feed's series in one transaction

Write failures are isolated to the episode. An insert that returns no id is
a failure of that episode too, unless abort_on_empty_insert is set, in which
case the remaining episodes are left unprocessed.
"""

from typing import Iterable, Optional, Tuple

from ..logging import get_logger
from ..models.dialect import Dialect, EnclosureDialect
from ..models.episode import Episode, NewItem
from ..models.reference import ReferenceMaps
from ..models.sync import SyncOutcome, SyncResult, SyncState
from ..repositories.item_store import ItemStore
from ..utils.exceptions import EmptyInsertResultError, ItemWriteError, StoreError

logger = get_logger(__name__)


def split_authors(author_field: str, primary_author: str) -> Tuple[str, str]:
    """
    Split a comma-separated author field.

    Returns:
        (primary_author, co_authors) where co_authors joins every other
        trimmed name with ", "
    """
    people = [person.strip() for person in author_field.split(",")]
    co_authors = ", ".join(person for person in people if person != primary_author)
    return primary_author, co_authors


class SyncEngine:
    """
    Persists a batch of normalized episodes for one feed.

    Owns no connection: the store is connected by the caller for the
    duration of the pass, and the reference maps are a read-only snapshot.
    """

    def __init__(
        self,
        store: ItemStore,
        reference_maps: ReferenceMaps,
        dialect: Dialect,
        channel_title: str,
        abort_on_empty_insert: bool = False,
        dry_run: bool = False,
    ):
        """
        Initialize sync engine.

        Args:
            store: Connected item store
            reference_maps: Author and series lookups for this pass
            dialect: Dialect selected for the feed
            channel_title: Feed channel title, used to find the series
            abort_on_empty_insert: Stop the batch when an insert returns no id
            dry_run: Check for existing items but write nothing
        """
        self.store = store
        self.reference_maps = reference_maps
        self.dialect = dialect
        self.channel_title = channel_title.strip()
        self.abort_on_empty_insert = abort_on_empty_insert
        self.dry_run = dry_run

    def build_new_item(self, episode: Episode) -> NewItem:
        """
        Assemble item columns for an episode.

        Unknown authors produce author_id=None; the store's foreign key is
        the only check that the author exists.
        """
        co_authors: Optional[str] = None
        if isinstance(self.dialect, EnclosureDialect):
            primary, co_authors = split_authors(episode.author, self.dialect.primary_author)
            author_id = self.reference_maps.author_id(primary)
        else:
            author_id = self.reference_maps.author_id(episode.author)

        return NewItem(
            title=episode.title,
            description=episode.description,
            duration=episode.duration_seconds,
            url=episode.url,
            date=episode.formatted_date,
            pub_date=episode.formatted_date,
            author_id=author_id,
            filename=episode.filename,
            url_type=episode.url_type,
            co_authors=co_authors,
        )

    def sync(self, episodes: Iterable[Episode], feed_url: str = "") -> SyncResult:
        """
        Sync a batch of episodes, in the order given.

        Returns:
            SyncResult with one outcome per processed episode
        """
        result = SyncResult(feed_url=feed_url, channel_title=self.channel_title)
        for episode in episodes:
            outcome = self.sync_episode(episode)
            result.outcomes.append(outcome)
            if outcome.state == SyncState.ABORTED:
                logger.error("Aborting remaining batch", feed_url=feed_url, filename=episode.filename)
                break

        logger.info(
            "Feed batch synced",
            feed_url=feed_url,
            channel_title=self.channel_title,
            inserted=result.inserted,
            skipped=result.skipped,
            failed=result.failed,
            aborted=result.aborted,
        )
        return result

    def sync_episode(self, episode: Episode) -> SyncOutcome:
        """Run one episode through check, insert and link."""
        log = logger.bind(title=episode.title, filename=episode.filename)

        def outcome(state: SyncState, item_id: Optional[int] = None, error: Optional[str] = None) -> SyncOutcome:
            return SyncOutcome(
                title=episode.title,
                filename=episode.filename,
                formatted_date=episode.formatted_date,
                state=state,
                item_id=item_id,
                error=error,
            )

        if episode.dedup_key is None:
            log.error("Episode has no usable publish date, cannot check for duplicates", pub_date=episode.pub_date)
            return outcome(SyncState.FAILED, error="unparseable publish date")

        try:
            existing_id = self.store.find_item(episode.filename, episode.formatted_date)
        except StoreError as e:
            log.error("Could not check for existing item", error=str(e))
            return outcome(SyncState.FAILED, error=str(e))

        if existing_id is not None:
            log.info("Item exists, skipping", item_id=existing_id)
            return outcome(SyncState.SKIPPED, item_id=existing_id)

        if self.dry_run:
            log.info("Item does not exist, would add it")
            return outcome(SyncState.WOULD_INSERT)

        log.info("Item does not exist, adding it now")
        item = self.build_new_item(episode)
        series_id = self.reference_maps.series_id(self.channel_title)
        if series_id is None:
            log.warning("No series found for channel", channel_title=self.channel_title)

        try:
            with self.store.transaction():
                item_id = self.store.insert_item(item)
                if item_id is None:
                    raise EmptyInsertResultError("Insert returned no item id", filename=episode.filename)

                log.debug("Creating series relation", channel_title=self.channel_title, series_id=series_id)
                self.store.link_series_item(series_id, item_id)
        except EmptyInsertResultError as e:
            if self.abort_on_empty_insert:
                log.error("No rows inserted, stopping", error=str(e))
                return outcome(SyncState.ABORTED, error=str(e))
            log.error("No rows inserted, moving on", error=str(e))
            return outcome(SyncState.FAILED, error=str(e))
        except (ItemWriteError, StoreError) as e:
            log.error("Could not write item to database", error=str(e))
            return outcome(SyncState.FAILED, error=str(e))

        log.info("Item added", item_id=item_id, series_id=series_id)
        return outcome(SyncState.INSERTED, item_id=item_id)
