"""
Unit Tests for slot identifier resolution
"""

import pytest

from enem_toolkit.common.exams import Language
from enem_toolkit.loader.variants import is_variant_slot, resolve_slot_id


class TestResolveSlotId:
    """Tests for resolve_slot_id()."""

    def test_resolve_when_variant_slot_2020_then_language_suffix(self):
        assert resolve_slot_id(2020, 3, Language.ENGLISH) == "3-ingles"

    def test_resolve_when_outside_variant_range_then_plain_number(self):
        assert resolve_slot_id(2020, 6, Language.ENGLISH) == "6"

    def test_resolve_when_variant_slot_2015_then_language_suffix(self):
        assert resolve_slot_id(2015, 92, "espanhol") == "92-espanhol"

    def test_resolve_when_low_slot_2015_then_plain_number(self):
        assert resolve_slot_id(2015, 3, "espanhol") == "3"

    def test_resolve_when_2009_then_plain_number(self):
        assert resolve_slot_id(2009, 3, "espanhol") == "3"

    @pytest.mark.parametrize("language", [None, ""])
    def test_resolve_when_no_language_then_plain_number(self, language):
        assert resolve_slot_id(2020, 1, language) == "1"

    def test_resolve_when_called_twice_then_same_result(self):
        assert resolve_slot_id(2012, 95, Language.ENGLISH) == resolve_slot_id(2012, 95, Language.ENGLISH)


class TestIsVariantSlot:
    """Tests for is_variant_slot()."""

    @pytest.mark.parametrize(
        "year,slot,expected",
        [(2020, 1, True), (2020, 5, True), (2020, 91, False), (2016, 91, True), (2016, 1, False), (2009, 91, False)],
    )
    def test_is_variant_slot_when_checked_then_matches_year_range(self, year, slot, expected):
        assert is_variant_slot(year, slot) is expected
