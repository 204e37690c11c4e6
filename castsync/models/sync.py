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
Sync outcome models.

Each episode in a batch ends in exactly one state:

    Pending -> SKIPPED       already persisted (dedup key matched)
            -> INSERTED      item row and series link written
            -> WOULD_INSERT  new episode found during a dry run
            -> FAILED        write failed or no dedup key; batch continues
            -> ABORTED       empty insert result under the abort policy;
                             the rest of the batch is not processed
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class SyncState(str, Enum):
    SKIPPED = "skipped"
    INSERTED = "inserted"
    WOULD_INSERT = "would_insert"
    FAILED = "failed"
    ABORTED = "aborted"


class SyncOutcome(BaseModel):
    """Terminal state of one episode."""

    title: str
    filename: str
    formatted_date: Optional[str] = None
    state: SyncState
    item_id: Optional[int] = None
    error: Optional[str] = None


class SyncResult(BaseModel):
    """Result of syncing one feed"""

    feed_url: str = ""
    channel_title: str = ""
    outcomes: List[SyncOutcome] = Field(default_factory=list)

    def count(self, state: SyncState) -> int:
        return sum(1 for outcome in self.outcomes if outcome.state == state)

    @property
    def inserted(self) -> int:
        return self.count(SyncState.INSERTED)

    @property
    def skipped(self) -> int:
        return self.count(SyncState.SKIPPED)

    @property
    def failed(self) -> int:
        return self.count(SyncState.FAILED)

    @property
    def aborted(self) -> bool:
        return self.count(SyncState.ABORTED) > 0


class FeedFailure(BaseModel):
    """A feed whose run ended before any episode was processed."""

    feed_url: str
    error: str


class FeedRunSummary(BaseModel):
    """Result of one scheduled run over all configured feeds"""

    results: List[SyncResult] = Field(default_factory=list)
    failures: List[FeedFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures
