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

"""Tests for dialect selection and reference lookups."""

import pytest
from pydantic import ValidationError

from castsync.models.dialect import EnclosureDialect, GuidDialect, select_dialect
from castsync.models.reference import ReferenceMaps
from castsync.utils.config import DEFAULT_SERIES_ALIASES

SHOW = "Women Worth Knowing"
PRIMARY = "Cheryl Brodersen"


class TestSelectDialect:
    """Tests for select_dialect function."""

    def test_exact_title_selects_enclosure_dialect(self):
        dialect = select_dialect(SHOW, SHOW, PRIMARY)

        assert isinstance(dialect, EnclosureDialect)
        assert dialect.kind == "enclosure"
        assert dialect.primary_author == PRIMARY

    def test_surrounding_whitespace_is_trimmed(self):
        assert isinstance(select_dialect(f"  {SHOW}\n", SHOW, PRIMARY), EnclosureDialect)

    def test_case_difference_selects_guid_dialect(self):
        assert isinstance(select_dialect(SHOW.upper(), SHOW, PRIMARY), GuidDialect)

    def test_other_titles_select_guid_dialect(self):
        dialect = select_dialect("Some Other Show", SHOW, PRIMARY)

        assert isinstance(dialect, GuidDialect)
        assert dialect.kind == "guid"

    def test_dialects_are_immutable(self):
        dialect = EnclosureDialect(primary_author=PRIMARY)

        with pytest.raises(ValidationError):
            dialect.primary_author = "Someone Else"


class TestReferenceMaps:
    """Tests for ReferenceMaps lookups."""

    @pytest.fixture
    def maps(self):
        return ReferenceMaps.from_rows(
            authors=[(1, "J. Smith"), ("2", PRIMARY)],
            series=[(10, "Example Show"), (11, "Back to Basics Radio")],
            series_aliases=DEFAULT_SERIES_ALIASES,
        )

    def test_author_lookup(self, maps):
        assert maps.author_id("J. Smith") == 1
        assert maps.author_id(PRIMARY) == 2

    def test_unknown_author(self, maps):
        assert maps.author_id("Nobody") is None

    def test_author_lookup_is_exact(self, maps):
        assert maps.author_id("j. smith") is None

    def test_series_lookup_trims_title(self, maps):
        assert maps.series_id("  Example Show ") == 10

    def test_series_alias(self, maps):
        """Test that the radio series is also reachable by its short title."""
        assert maps.series_id("Back to Basics Radio") == 11
        assert maps.series_id("Back to Basics") == 11

    def test_no_aliases(self):
        maps = ReferenceMaps.from_rows(authors=[], series=[(11, "Back to Basics Radio")])

        assert maps.series_id("Back to Basics") is None

    def test_maps_are_read_only(self, maps):
        with pytest.raises(TypeError):
            maps.author_ids["New Person"] = 99
