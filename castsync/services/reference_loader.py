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
Reference data loader - author and series lookups for one feed pass.
"""

from typing import Dict, List, Optional

from ..logging import get_logger
from ..models.reference import ReferenceMaps
from ..repositories.item_store import ItemStore
from ..utils.exceptions import ReferenceDataError, StoreError

logger = get_logger(__name__)


def load_reference_maps(store: ItemStore, series_aliases: Optional[Dict[str, List[str]]] = None) -> ReferenceMaps:
    """
    Load the author and series lookup tables.

    Both tables are read in full. Partial reference data is never returned:
    if either read fails the whole load fails.

    Args:
        store: Connected item store
        series_aliases: Extra titles a series can be looked up by

    Returns:
        Immutable ReferenceMaps snapshot

    Raises:
        ReferenceDataError: If either table cannot be read
    """
    try:
        authors = store.get_authors()
        series = store.get_series()
    except StoreError as e:
        raise ReferenceDataError("Could not load reference data", error=str(e)) from e

    maps = ReferenceMaps.from_rows(authors, series, series_aliases)
    logger.info("Loaded reference data", authors=len(maps.author_ids), series=len(maps.series_ids))
    return maps
