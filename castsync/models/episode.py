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

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class Episode(BaseModel):
    """Canonical episode normalized from a feed entry."""

    title: str
    author: str
    description: Optional[str] = None
    url: str
    duration: Optional[str] = None  # Raw itunes:duration value
    duration_seconds: Optional[int] = None  # None when the duration could not be parsed
    url_type: str
    filename: str
    pub_date: str  # Publish date exactly as it appeared in the feed
    published_at: Optional[datetime] = None  # UTC, None when feedparser could not parse pub_date
    formatted_date: Optional[str] = None  # YYYY-M-D (UTC), None when pub_date is not a date

    @property
    def dedup_key(self) -> Optional[tuple]:
        """(filename, formatted_date), or None when no date could be derived."""
        if self.formatted_date is None:
            return None
        return (self.filename, self.formatted_date)


class NewItem(BaseModel):
    """Column values for one new row in the item table."""

    title: str
    description: Optional[str] = None
    duration: Optional[int] = None
    url: str
    date: str
    pub_date: str
    author_id: Optional[int] = None
    filename: str
    url_type: str
    co_authors: Optional[str] = None  # Only populated for enclosure-dialect feeds
