"""VariationIndex construction, lookups and initial selection."""

import pytest

from apps.catalog.services import (
    AttributeDefinition,
    InconsistentIndexError,
    InvalidTargetError,
    VariationIndex,
)

from .conftest import BLUE, COLOR, MEDIUM, RED, SIZE, SMALL, UNIT_A, UNIT_B, record


class TestCatalogDerivation:
    def test_units_in_first_seen_order(self, shirt_index):
        assert shirt_index.units == (UNIT_A, UNIT_B)

    def test_attribute_values_collected_from_variations(self, shirt_index):
        assert shirt_index.attribute_values == {
            COLOR: (RED, BLUE),
            SIZE: (SMALL, MEDIUM),
        }

    def test_explicit_units_are_kept(self):
        index = VariationIndex([], [record(1, UNIT_A)], units=[UNIT_A, UNIT_B])
        assert index.has_unit(UNIT_B)

    def test_lookups(self, shirt_index):
        assert shirt_index.has_attribute(COLOR)
        assert not shirt_index.has_attribute(99)
        assert shirt_index.has_attribute_value(SIZE, MEDIUM)
        assert not shirt_index.has_attribute_value(SIZE, RED)
        assert shirt_index.attribute_name(SIZE) == 'Size'
        assert shirt_index.get_variation(3).unit_combination_id == UNIT_A
        assert shirt_index.get_variation(42) is None
        assert len(shirt_index) == 5


class TestEmptyOption:
    def test_has_empty_option(self, color_index, shirt_index):
        assert color_index.has_empty_option is True
        assert shirt_index.has_empty_option is False


class TestInitialSelection:
    def test_defaults_to_first_variation(self, shirt_index):
        attributes, unit_id = shirt_index.initial_selection()
        assert attributes == {COLOR: RED, SIZE: SMALL}
        assert unit_id == UNIT_A

    def test_given_variation(self, shirt_index):
        attributes, unit_id = shirt_index.initial_selection(5)
        assert attributes == {COLOR: BLUE, SIZE: SMALL}
        assert unit_id == UNIT_B

    def test_empty_option_variation_leaves_everything_unset(self, color_index):
        attributes, unit_id = color_index.initial_selection(3)
        assert attributes == {COLOR: None}
        assert unit_id == UNIT_B

    def test_unknown_variation_is_rejected(self, shirt_index):
        with pytest.raises(InvalidTargetError):
            shirt_index.initial_selection(99)

    def test_empty_index_is_inconsistent(self):
        index = VariationIndex([AttributeDefinition(COLOR, 'Color')], [])
        with pytest.raises(InconsistentIndexError):
            index.initial_selection()


class TestValidState:
    def test_known_state(self, shirt_index):
        assert shirt_index.is_valid_state({COLOR: RED, SIZE: None}, UNIT_B)

    def test_unknown_unit(self, shirt_index):
        assert not shirt_index.is_valid_state({COLOR: RED, SIZE: SMALL}, 999)

    def test_missing_attribute(self, shirt_index):
        assert not shirt_index.is_valid_state({COLOR: RED}, UNIT_A)

    def test_unknown_value(self, shirt_index):
        assert not shirt_index.is_valid_state({COLOR: RED, SIZE: 999}, UNIT_A)
