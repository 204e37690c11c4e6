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

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator


class ReferenceMaps(BaseModel):
    """
    Read-only lookup snapshot of author and series ids.

    Built once per feed pass and handed to the sync engine; never mutated
    during the pass.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    author_ids: Mapping[str, int]
    series_ids: Mapping[str, int]

    @field_validator("author_ids", "series_ids", mode="after")
    @classmethod
    def _freeze(cls, value: Mapping[str, int]) -> Mapping[str, int]:
        return MappingProxyType(dict(value))

    @classmethod
    def from_rows(
        cls,
        authors: Iterable[Tuple[int, str]],
        series: Iterable[Tuple[int, str]],
        series_aliases: Optional[Dict[str, List[str]]] = None,
    ) -> "ReferenceMaps":
        """
        Build lookups from (id, name) author rows and (id, title) series rows.

        Each alias in series_aliases makes a series reachable by an extra title,
        e.g. "Back to Basics Radio" also answers to "Back to Basics".
        """
        aliases = series_aliases or {}

        author_ids: Dict[str, int] = {}
        for author_id, name in authors:
            author_ids[name] = int(author_id)

        series_ids: Dict[str, int] = {}
        for series_id, title in series:
            for alias in aliases.get(title, []):
                series_ids[alias] = int(series_id)
            series_ids[title] = int(series_id)

        return cls(author_ids=author_ids, series_ids=series_ids)

    def author_id(self, name: str) -> Optional[int]:
        return self.author_ids.get(name)

    def series_id(self, title: str) -> Optional[int]:
        return self.series_ids.get(title.strip())
