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

"""Core feed handling: fetching, parsing, normalization and batch selection."""

from .batch import select_batch
from .feed_source import FeedSource, ParsedFeed
from .normalizer import normalize_entries, normalize_entry

__all__ = [
    "FeedSource",
    "ParsedFeed",
    "normalize_entries",
    "normalize_entry",
    "select_batch",
]
