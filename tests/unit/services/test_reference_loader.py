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

"""Tests for reference data loading."""

from unittest.mock import Mock

import pytest

from castsync.repositories.item_store import ItemStore
from castsync.services.reference_loader import load_reference_maps
from castsync.utils.exceptions import ReferenceDataError, StoreError


def test_loads_authors_and_series(store, seed):
    maps = load_reference_maps(store, {"Back to Basics Radio": ["Back to Basics"]})

    assert maps.author_id("Jane Doe") == seed["Jane Doe"]
    assert maps.series_id("Example Show") == seed["Example Show"]
    assert maps.series_id("Back to Basics") == seed["Back to Basics Radio"]


def test_empty_tables(store):
    maps = load_reference_maps(store)

    assert dict(maps.author_ids) == {}
    assert dict(maps.series_ids) == {}


def test_series_read_failure_discards_authors():
    """Test that a failure on either table fails the whole load."""
    store = Mock(spec=ItemStore)
    store.get_authors.return_value = [(1, "J. Smith")]
    store.get_series.side_effect = StoreError("Could not read series", error="relation does not exist")

    with pytest.raises(ReferenceDataError) as exc_info:
        load_reference_maps(store)

    assert "Could not read series" in str(exc_info.value)
