"""
Tests for the stored recipe -> edit form mapping.
"""

from kitchen_api.schemas import RecipeInput
from kitchen_api.services.recipe_form import recipe_to_form
from shared.config.constants import ALLERGEN_KEYS, Difficulty
from tests.conftest import make_recipe


class TestRecipeToForm:
    def test_maps_header_and_lines(self, seed_recipe, seed_ingredients):
        tomato, oil = seed_ingredients

        form = recipe_to_form(seed_recipe)

        assert form.id == seed_recipe.id
        assert form.recipe_no == "RCP-2026-001"
        assert form.difficulty == Difficulty.EASY
        assert form.sale_price == 30
        assert [row.ingredient_id for row in form.ingredients] == [tomato.id, oil.id]
        assert form.ingredients[0].ingredient_name == "Domates"
        assert form.ingredients[0].cost_per_unit == 5
        assert form.ingredients[1].quantity == 1

    def test_allergens_always_have_fifteen_keys(self, seed_recipe):
        form = recipe_to_form(seed_recipe)

        assert list(form.allergens) == list(ALLERGEN_KEYS)
        assert form.allergens["gluten"] is True
        assert form.allergens["sesame"] is False

    def test_missing_values_fall_back(self, db_session, seed_outlet):
        recipe = make_recipe(db_session, seed_outlet, "RCP-2026-050", "Ayran", allergens={})
        recipe.waste_percentage = None
        db_session.commit()

        form = recipe_to_form(recipe)

        assert form.waste_percentage == 5
        assert form.yield_amount == 1
        assert form.category_id is None
        assert form.ingredients == []

    def test_form_round_trips_into_save_payload(self, seed_recipe):
        payload = recipe_to_form(seed_recipe).model_dump(exclude={"id", "outlet_id"})

        data = RecipeInput(**payload)

        assert data.recipe_no == "RCP-2026-001"
        assert len(data.ingredients) == 2


class TestFormEndpoint:
    def test_get_form(self, client, seed_recipe):
        response = client.get(f"/api/recipes/{seed_recipe.id}/form")

        assert response.status_code == 200
        data = response.json()
        assert data["waste_percentage"] == 5
        assert data["ingredients"][0]["ingredient_name"] == "Domates"
