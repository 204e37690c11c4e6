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
Feed source - downloads raw feed XML and parses it with feedparser.

Both steps raise on failure; the caller decides how far the failure reaches.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

import feedparser
import requests

from ..logging import get_logger
from ..utils.exceptions import FeedFetchError, FeedParseError

logger = get_logger(__name__)


@dataclass
class ParsedFeed:
    """A parsed feed: the trimmed channel title and its raw entries."""

    channel_title: str
    entries: List[Any] = field(default_factory=list)


class FeedSource:
    """
    Fetches and parses podcast RSS feeds.

    Handles:
    - HTTP download via requests with a fixed timeout
    - Parsing via feedparser into attribute dictionaries
    - Rejecting documents that have no channel title
    """

    def __init__(self, timeout: int = 30, session: Optional[requests.Session] = None) -> None:
        """
        Initialize feed source.

        Args:
            timeout: Seconds to wait for the feed server
            session: Optional requests session (defaults to module-level requests)
        """
        self.timeout = timeout
        self.session = session

    def fetch(self, url: str) -> str:
        """
        Download the raw feed document.

        Args:
            url: Feed URL

        Returns:
            Feed XML text

        Raises:
            FeedFetchError: If the request fails or returns an error status
        """
        logger.info("Fetching feed", feed_url=url)
        http = self.session or requests
        try:
            response = http.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FeedFetchError("Could not fetch feed", url=url, error=str(e)) from e

        logger.debug("Fetched feed", feed_url=url, size=len(response.text))
        return response.text

    def parse(self, content: str, url: str = "") -> ParsedFeed:
        """
        Parse feed XML.

        A feed with no items parses to an empty entry list. A document without
        a channel title is not treated as a feed.

        Raises:
            FeedParseError: If the document has no channel title
        """
        parsed_feed = feedparser.parse(content)

        channel_title = parsed_feed.feed.get("title")
        if not channel_title:
            reason = str(parsed_feed.get("bozo_exception", "")) or "missing channel title"
            raise FeedParseError("Document is not a usable RSS feed", url=url, reason=reason)

        if parsed_feed.bozo:
            logger.warning(
                "Feed parsed with errors",
                feed_url=url,
                error=str(parsed_feed.get("bozo_exception", "")),
            )

        return ParsedFeed(channel_title=channel_title.strip(), entries=list(parsed_feed.entries or []))

    def load(self, url: str) -> ParsedFeed:
        """Fetch and parse a feed."""
        return self.parse(self.fetch(url), url=url)
