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
Explicit parse results for the permissive feed parsers.

Feed values are frequently malformed. Rather than leaking NaN or sentinel
dates into the pipeline, parsers return ``Ok(value)`` or ``Invalid(raw, reason)``
and the caller decides what to do with an invalid value.

Example:
    result = parse_duration_seconds("1:02:03")
    if isinstance(result, Ok):
        seconds = result.value
"""

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successfully parsed value."""

    value: T


@dataclass(frozen=True)
class Invalid:
    """Value that could not be parsed."""

    raw: Optional[str]
    reason: str


ParseResult = Union[Ok[T], Invalid]


def value_or_none(result: "ParseResult[Any]") -> Optional[Any]:
    """Unwrap a parse result, mapping Invalid to None."""
    if isinstance(result, Ok):
        return result.value
    return None
