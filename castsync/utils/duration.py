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

"""Duration parsing utilities."""

import re
from typing import Optional

from .result import Invalid, Ok, ParseResult

_LEADING_INT = re.compile(r"^\s*(\d+)")


def _leading_int(value: str) -> Optional[int]:
    """Parse the leading run of digits, ignoring any trailing characters."""
    match = _LEADING_INT.match(value)
    if not match:
        return None
    return int(match.group(1))


def parse_duration_seconds(duration: Optional[object]) -> ParseResult[int]:
    """
    Parse an itunes:duration value to seconds.

    Handles two formats:
    - HH:MM:SS: "1:02:03" -> 3723
    - Bare seconds: "45" -> 45

    Anything that does not split into three non-empty colon-separated parts
    is read as a bare integer, so partial values like "30:00" resolve to
    their leading number (30). Trailing garbage after digits is ignored.

    Args:
        duration: Raw duration value from the feed (usually a string)

    Returns:
        Ok with the duration in seconds, or Invalid if nothing parses
    """
    if duration is None:
        return Invalid(raw=None, reason="missing duration")

    text = str(duration)
    parts = text.split(":")

    if len(parts) >= 3 and all(parts[:3]):
        hours, minutes, seconds = (_leading_int(part) for part in parts[:3])
        if hours is None or minutes is None or seconds is None:
            return Invalid(raw=text, reason="non-numeric duration component")
        return Ok(hours * 3600 + minutes * 60 + seconds)

    value = _leading_int(text)
    if value is None:
        return Invalid(raw=text, reason="not an integer")
    return Ok(value)
