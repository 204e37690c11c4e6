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
Service layer for castsync.

Business logic for the sync pipeline, shared by the CLI and any scheduler
that drives it.
"""

from .feed_sync_service import FeedSyncService, PreparedFeed
from .reference_loader import load_reference_maps
from .sync_engine import SyncEngine

__all__ = [
    "FeedSyncService",
    "PreparedFeed",
    "SyncEngine",
    "load_reference_maps",
]
