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

"""Tests for publish date conversion."""

import time
from datetime import datetime, timezone

import feedparser

from castsync.utils.dates import format_utc_date, parse_feed_date
from castsync.utils.result import Invalid, Ok
from tests.feed_builders import SHOW_TITLE, rss_document, rss_item


def published_parsed(pub_date):
    """Run a pubDate through feedparser and return its parsed tuple."""
    entry = feedparser.parse(rss_document(SHOW_TITLE, [rss_item(pub_date=pub_date)])).entries[0]
    return entry.get("published_parsed")


class TestParseFeedDate:
    """Tests for parse_feed_date function."""

    def test_struct_time(self):
        parsed = time.struct_time((2024, 3, 5, 10, 30, 0, 1, 65, 0))

        assert parse_feed_date(parsed) == Ok(datetime(2024, 3, 5, 10, 30, tzinfo=timezone.utc))

    def test_iso_with_z_suffix(self):
        result = parse_feed_date(published_parsed("2024-03-05T00:00:00Z"))

        assert result == Ok(datetime(2024, 3, 5, tzinfo=timezone.utc))

    def test_rfc_2822_named_zone(self):
        result = parse_feed_date(published_parsed("Tue, 05 Mar 2024 10:30:00 GMT"))

        assert result == Ok(datetime(2024, 3, 5, 10, 30, tzinfo=timezone.utc))

    def test_numeric_offset_with_minutes(self):
        """Test that a +05:30 offset is applied before taking the UTC value."""
        result = parse_feed_date(published_parsed("Tue, 05 Mar 2024 00:00:00 +05:30"))

        assert result == Ok(datetime(2024, 3, 4, 18, 30, tzinfo=timezone.utc))

    def test_negative_offset(self):
        result = parse_feed_date(published_parsed("Tue, 05 Mar 2024 22:00:00 -0500"))

        assert result == Ok(datetime(2024, 3, 6, 3, 0, tzinfo=timezone.utc))

    def test_unparseable_date_is_invalid(self):
        """Test that feedparser leaves no tuple for garbage and that gives Invalid."""
        assert isinstance(parse_feed_date(published_parsed("not a date")), Invalid)

    def test_missing_is_invalid(self):
        assert isinstance(parse_feed_date(None), Invalid)

    def test_out_of_range_tuple_is_invalid(self):
        assert isinstance(parse_feed_date((2024, 13, 40, 0, 0, 0)), Invalid)


class TestFormatUtcDate:
    """Tests for format_utc_date function."""

    def test_no_zero_padding(self):
        """Test that month and day are not zero padded."""
        assert format_utc_date(datetime(2024, 3, 5, tzinfo=timezone.utc)) == "2024-3-5"

    def test_two_digit_month_and_day(self):
        assert format_utc_date(datetime(2024, 12, 21, 12, tzinfo=timezone.utc)) == "2024-12-21"
