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

"""Publish-date conversion for feedparser's parsed date tuples."""

from datetime import datetime, timezone
from typing import Any

from .result import Invalid, Ok, ParseResult


def parse_feed_date(date_tuple: Any) -> ParseResult[datetime]:
    """
    Convert a feedparser date tuple to an aware UTC datetime.

    feedparser normalizes every date format it understands (RFC 2822 with
    named zones or numeric offsets, W3C/ISO 8601) to a UTC ``time.struct_time``
    in ``published_parsed``; it leaves the key unset when it cannot parse.

    Args:
        date_tuple: ``entry.published_parsed`` (time.struct_time or None)

    Returns:
        Ok with the UTC datetime, or Invalid if there is no usable date
    """
    if not date_tuple:
        return Invalid(raw=None, reason="missing or unparseable date")
    try:
        return Ok(datetime(*date_tuple[:6], tzinfo=timezone.utc))
    except (TypeError, ValueError) as e:
        return Invalid(raw=str(tuple(date_tuple)), reason=str(e))


def format_utc_date(moment: datetime) -> str:
    """
    Format a UTC datetime as YYYY-M-D, without zero padding.

    Example:
        format_utc_date(datetime(2024, 3, 5, tzinfo=timezone.utc))  # "2024-3-5"
    """
    return f"{moment.year}-{moment.month}-{moment.day}"
