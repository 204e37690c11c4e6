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
Feed item normalization.

Turns feedparser entries into canonical Episode records. Normalization is
permissive: a missing enclosure, an odd duration or an unparseable date
still produces an Episode, with the affected fields left degenerate or None.
"""

from typing import Any, Iterable, List, Mapping, Optional

from ..logging import get_logger
from ..models.dialect import Dialect, EnclosureDialect
from ..models.episode import Episode
from ..utils.dates import format_utc_date, parse_feed_date
from ..utils.duration import parse_duration_seconds
from ..utils.result import Invalid, value_or_none
from ..utils.url_parts import extract_basename, extract_extension, upgrade_scheme

logger = get_logger(__name__)

# url_type used when an enclosure-dialect item has no enclosure URL
FALLBACK_URL_TYPE = "mp3"


def _text(entry: Mapping[str, Any], key: str) -> str:
    value = entry.get(key)
    return str(value).strip() if value is not None else ""


def _enclosure_url(entry: Mapping[str, Any]) -> Optional[str]:
    for enclosure in entry.get("enclosures") or []:
        href = enclosure.get("href")
        if href:
            return str(href)
    return None


def _source_url(entry: Mapping[str, Any], dialect: Dialect) -> Optional[str]:
    if isinstance(dialect, EnclosureDialect):
        return _enclosure_url(entry)
    guid = entry.get("id") or entry.get("guid")
    return str(guid) if guid else None


def normalize_entry(entry: Mapping[str, Any], dialect: Dialect) -> Episode:
    """
    Normalize one feed entry under the given dialect.

    Args:
        entry: feedparser entry (or any mapping with the same keys)
        dialect: Dialect selected for the feed

    Returns:
        Canonical Episode
    """
    source_url = _source_url(entry, dialect)
    url = upgrade_scheme(source_url) if source_url else ""

    if not source_url and isinstance(dialect, EnclosureDialect):
        url_type = FALLBACK_URL_TYPE
    else:
        url_type = extract_extension(url)

    raw_duration = entry.get("itunes_duration")
    duration = parse_duration_seconds(raw_duration)
    if isinstance(duration, Invalid):
        logger.debug("Unparseable duration", title=entry.get("title"), duration=raw_duration, reason=duration.reason)

    pub_date = _text(entry, "published")
    parsed_date = parse_feed_date(entry.get("published_parsed"))
    if isinstance(parsed_date, Invalid):
        logger.warning("Unparseable publish date", title=entry.get("title"), pub_date=pub_date)
    published_at = value_or_none(parsed_date)

    description = entry.get("summary", entry.get("description"))

    return Episode(
        title=_text(entry, "title"),
        author=_text(entry, "author"),
        description=str(description).strip() if description is not None else None,
        url=url,
        duration=str(raw_duration) if raw_duration is not None else None,
        duration_seconds=value_or_none(duration),
        url_type=url_type,
        filename=extract_basename(url) or "",
        pub_date=pub_date,
        published_at=published_at,
        formatted_date=format_utc_date(published_at) if published_at else None,
    )


def normalize_entries(entries: Optional[Iterable[Mapping[str, Any]]], dialect: Dialect) -> List[Episode]:
    """Normalize every entry of a feed; a feed without items gives an empty list."""
    if not entries:
        return []
    return [normalize_entry(entry, dialect) for entry in entries]
