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

"""Data models shared across the sync pipeline."""

from .dialect import Dialect, EnclosureDialect, GuidDialect, select_dialect
from .episode import Episode, NewItem
from .reference import ReferenceMaps
from .sync import FeedFailure, FeedRunSummary, SyncOutcome, SyncResult, SyncState

__all__ = [
    "Dialect",
    "EnclosureDialect",
    "GuidDialect",
    "select_dialect",
    "Episode",
    "NewItem",
    "ReferenceMaps",
    "FeedFailure",
    "FeedRunSummary",
    "SyncOutcome",
    "SyncResult",
    "SyncState",
]
