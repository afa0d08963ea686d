"""
Tests for vocabulary enums and their label functions.
"""

import pytest

from shared.config.constants import (
    ALLERGEN_KEYS,
    Allergen,
    Difficulty,
    OutletStatus,
    RecipeStatus,
    allergen_label,
    difficulty_label,
    empty_allergens,
    outlet_status_label,
    recipe_status_label,
)


class TestLabels:
    def test_every_enum_member_has_a_label(self):
        for allergen in Allergen:
            assert allergen_label(allergen)
        for status in OutletStatus:
            assert outlet_status_label(status)
        for status in RecipeStatus:
            assert recipe_status_label(status)
        for difficulty in Difficulty:
            assert difficulty_label(difficulty)

    def test_raw_values_are_accepted(self):
        assert outlet_status_label("maintenance") == "Bakımda"
        assert recipe_status_label("archived") == "Arşivlenmiş"
        assert difficulty_label("Hard") == "Zor"
        assert allergen_label("peanut") == "Yer Fıstığı"

    def test_none_renders_dash(self):
        assert outlet_status_label(None) == "-"
        assert recipe_status_label(None) == "-"
        assert difficulty_label(None) == "-"

    @pytest.mark.parametrize(
        "label_fn, value",
        [
            (outlet_status_label, "open"),
            (recipe_status_label, "draft"),
            (difficulty_label, "easy"),
            (allergen_label, "lupin"),
        ],
    )
    def test_unknown_values_raise(self, label_fn, value):
        with pytest.raises(ValueError):
            label_fn(value)


class TestAllergenMatrix:
    def test_fifteen_keys_in_order(self):
        assert len(ALLERGEN_KEYS) == 15
        assert ALLERGEN_KEYS[0] == "gluten"
        assert ALLERGEN_KEYS[-1] == "sulphites"

    def test_empty_allergens(self):
        allergens = empty_allergens()

        assert list(allergens) == list(ALLERGEN_KEYS)
        assert not any(allergens.values())
