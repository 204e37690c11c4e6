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
Feed dialects.

Source feeds follow one of two fixed conventions for locating the episode
audio URL and representing authorship. The dialect is chosen once per feed,
from the channel title, and carried through normalization and insert
argument assembly.

- EnclosureDialect: one specific show. Audio URL comes from the enclosure;
  the author field lists several people, the first being the show's primary
  author and the rest co-authors.
- GuidDialect: every other feed. Audio URL comes from the item GUID and the
  author field is a single name.
"""

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict


class EnclosureDialect(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["enclosure"] = "enclosure"
    primary_author: str


class GuidDialect(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["guid"] = "guid"


Dialect = Union[EnclosureDialect, GuidDialect]


def select_dialect(channel_title: str, enclosure_show_title: str, primary_author: str) -> Dialect:
    """
    Pick the dialect for a feed from its channel title.

    Only an exact match of the trimmed title selects EnclosureDialect; case
    or inner whitespace differences fall through to GuidDialect.
    """
    if (channel_title or "").strip() == enclosure_show_title:
        return EnclosureDialect(primary_author=primary_author)
    return GuidDialect()
