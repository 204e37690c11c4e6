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

from datetime import datetime, timezone
from typing import List, Sequence

from ..models.episode import Episode

DEFAULT_BATCH_SIZE = 10

# Episodes without a usable publish date sort before everything else
_UNDATED = datetime.min.replace(tzinfo=timezone.utc)


def _sort_key(episode: Episode) -> datetime:
    return episode.published_at or _UNDATED


def select_batch(episodes: Sequence[Episode], size: int = DEFAULT_BATCH_SIZE) -> List[Episode]:
    """
    Select the most recent episodes for processing.

    Sorts ascending by publish date (stable for ties) and keeps the last
    ``size`` episodes, still in ascending order.
    """
    if size <= 0:
        return []
    ordered = sorted(episodes, key=_sort_key)
    return ordered[-size:]
