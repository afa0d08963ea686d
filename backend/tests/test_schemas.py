"""
Tests for request schema normalization.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from kitchen_api.schemas import RecipeIngredientInput, RecipeInput, OutletInput
from shared.config.constants import ALLERGEN_KEYS, Difficulty


class TestRecipeInput:
    def test_blank_form_fields_become_none(self):
        data = RecipeInput(
            name="Mercimek Çorbası",
            recipe_no="",
            category_id="",
            prep_time="",
            difficulty="",
            sale_price="",
            instructions="   ",
        )

        assert data.recipe_no is None
        assert data.category_id is None
        assert data.prep_time is None
        assert data.difficulty is None
        assert data.sale_price is None
        assert data.instructions is None

    def test_blank_waste_uses_default(self):
        assert RecipeInput(name="Pilav", waste_percentage="").waste_percentage == 5

    def test_zero_waste_is_kept(self):
        assert RecipeInput(name="Pilav", waste_percentage=0).waste_percentage == 0

    @pytest.mark.parametrize("waste", [-1, 100.5])
    def test_waste_out_of_range_rejected(self, waste):
        with pytest.raises(PydanticValidationError):
            RecipeInput(name="Pilav", waste_percentage=waste)

    def test_yield_below_one_rejected(self):
        with pytest.raises(PydanticValidationError):
            RecipeInput(name="Pilav", yield_amount=0)

    def test_partial_allergens_filled_to_fifteen_keys(self):
        data = RecipeInput(name="Pilav", allergens={"gluten": True})

        assert list(data.allergens) == list(ALLERGEN_KEYS)
        assert data.allergens["gluten"] is True
        assert data.allergens["milk"] is False

    def test_unknown_allergen_rejected(self):
        with pytest.raises(PydanticValidationError, match="Bilinmeyen alerjen"):
            RecipeInput(name="Pilav", allergens={"lupin": True})

    def test_difficulty_parsed(self):
        assert RecipeInput(name="Pilav", difficulty="Medium").difficulty == Difficulty.MEDIUM

    def test_image_url_must_be_http(self):
        with pytest.raises(PydanticValidationError):
            RecipeInput(name="Pilav", image_url="javascript:alert(1)")

    def test_empty_image_url_is_none(self):
        assert RecipeInput(name="Pilav", image_url="").image_url is None

    def test_blank_ingredient_rows_are_dropped_before_validation(self):
        data = RecipeInput(
            name="Pilav",
            ingredients=[
                {"ingredient_id": "", "ingredient_name": "", "quantity": ""},
                {"ingredient_name": "Pirinç", "quantity": "1"},
            ],
        )

        assert [row.ingredient_name for row in data.ingredients] == ["Pirinç"]

    def test_short_name_rejected(self):
        with pytest.raises(PydanticValidationError):
            RecipeInput(name="P")


class TestRecipeIngredientInput:
    def test_numeric_strings_parsed(self):
        row = RecipeIngredientInput(ingredient_name="Tuz", quantity="0.5", cost_per_unit="12.5")

        assert row.quantity == 0.5
        assert row.cost_per_unit == 12.5

    def test_blank_quantity_rejected(self):
        with pytest.raises(PydanticValidationError):
            RecipeIngredientInput(ingredient_name="Tuz", quantity="")

    def test_zero_quantity_rejected(self):
        with pytest.raises(PydanticValidationError):
            RecipeIngredientInput(ingredient_name="Tuz", quantity=0)

    @pytest.mark.parametrize("cost", ["", "abc", None, "nan", -3])
    def test_unusable_cost_becomes_zero(self, cost):
        row = RecipeIngredientInput(ingredient_name="Tuz", quantity=1, cost_per_unit=cost)

        assert row.cost_per_unit == 0

    def test_blank_row(self):
        row = RecipeIngredientInput(ingredient_id="", ingredient_name=" ", quantity=1)

        assert row.is_blank

    def test_library_row_is_not_blank(self):
        assert not RecipeIngredientInput(ingredient_id=3, quantity=1).is_blank


class TestOutletInput:
    def test_blank_optional_fields_become_none(self):
        data = OutletInput(name="Moda Şube", type="", location=" ")

        assert data.type is None
        assert data.location is None

    def test_unknown_status_rejected(self):
        with pytest.raises(PydanticValidationError):
            OutletInput(name="Moda Şube", status="open")
