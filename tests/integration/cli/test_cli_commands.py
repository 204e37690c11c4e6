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

"""Tests for the castsync command line."""

import pytest
from click.testing import CliRunner

from castsync import cli
from castsync.core.feed_source import FeedSource
from castsync.repositories.sqlite_item_store import SqliteItemStore
from castsync.utils.exceptions import FeedFetchError
from tests.feed_builders import SHOW_TITLE, rss_document, rss_item
from tests.store_helpers import add_author, add_series, count_items

FEED_URL = "https://example.com/feed.xml"


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    """Point the CLI at a seeded temporary database and canned feeds."""
    path = tmp_path / "castsync.db"
    with SqliteItemStore(str(path)) as store:
        add_author(store, "J. Smith")
        add_series(store, SHOW_TITLE)

    monkeypatch.setenv("DATABASE_PATH", str(path))
    monkeypatch.setenv("FEED_URLS", FEED_URL)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setattr(cli, "configure_structlog", lambda: None)
    return path


@pytest.fixture
def feeds(monkeypatch):
    documents = {
        FEED_URL: rss_document(
            SHOW_TITLE,
            [rss_item(title="Episode One", guid="http://x.com/a/ep1.mp3", pub_date="2024-03-05T00:00:00Z")],
        )
    }

    def fake_fetch(self, url):
        if url not in documents:
            raise FeedFetchError("Could not fetch feed", url=url)
        return documents[url]

    monkeypatch.setattr(FeedSource, "fetch", fake_fetch)
    return documents


@pytest.fixture
def runner():
    return CliRunner()


class TestSyncCommand:
    def test_sync_inserts(self, runner, db_path, feeds):
        result = runner.invoke(cli.main, ["sync"])

        assert result.exit_code == 0, result.output
        assert "Episode One" in result.output
        assert "Inserted: 1" in result.output
        with SqliteItemStore(str(db_path)) as store:
            assert count_items(store) == 1

    def test_sync_twice_skips(self, runner, db_path, feeds):
        runner.invoke(cli.main, ["sync"])

        result = runner.invoke(cli.main, ["sync"])

        assert result.exit_code == 0, result.output
        assert "Inserted: 0, skipped: 1" in result.output

    def test_dry_run(self, runner, db_path, feeds):
        result = runner.invoke(cli.main, ["sync", "--dry-run"])

        assert result.exit_code == 0, result.output
        assert "without --dry-run" in result.output
        with SqliteItemStore(str(db_path)) as store:
            assert count_items(store) == 0

    def test_failed_feed_exits_nonzero(self, runner, db_path, feeds):
        result = runner.invoke(cli.main, ["sync", "-f", "https://example.com/missing.xml", "-f", FEED_URL])

        assert result.exit_code == 1
        assert "Inserted: 1" in result.output

    def test_no_feeds_configured(self, runner, db_path, feeds, monkeypatch):
        monkeypatch.setenv("FEED_URLS", "")

        result = runner.invoke(cli.main, ["sync"])

        assert result.exit_code == 1

    def test_bad_batch_size(self, runner, db_path, feeds, monkeypatch):
        monkeypatch.setenv("CASTSYNC_BATCH_SIZE", "ten")

        result = runner.invoke(cli.main, ["sync"])

        assert result.exit_code == 1


class TestPreviewCommand:
    def test_preview(self, runner, db_path, feeds):
        result = runner.invoke(cli.main, ["preview", FEED_URL])

        assert result.exit_code == 0, result.output
        assert SHOW_TITLE in result.output
        assert "guid dialect" in result.output
        assert "https://x.com/a/ep1.mp3" in result.output
        assert "2024-3-5" in result.output

    def test_preview_does_not_write(self, runner, db_path, feeds):
        runner.invoke(cli.main, ["preview", FEED_URL])

        with SqliteItemStore(str(db_path)) as store:
            assert count_items(store) == 0

    def test_preview_unreachable_feed(self, runner, db_path, feeds):
        result = runner.invoke(cli.main, ["preview", "https://example.com/missing.xml"])

        assert result.exit_code == 1
