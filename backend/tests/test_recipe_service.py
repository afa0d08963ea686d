"""
Tests for RecipeService - the atomic recipe save and the recipe reads.

Tests cover:
- Create with library and free-text ingredient lines
- Overwrite replacing every line
- Rollback of a failed save
- Recipe number generation and uniqueness
- Category ownership checks
"""

import pytest
from sqlalchemy.exc import IntegrityError

import kitchen_api.services.domain.recipe_service as recipe_service_module
from kitchen_api.models import Ingredient, Recipe
from kitchen_api.schemas import RecipeInput
from kitchen_api.services.domain import CategoryService, RecipeService
from shared.config.constants import ErrorMessages
from shared.utils.exceptions import (
    ConflictError,
    DuplicateEntityError,
    NotFoundError,
    ValidationError,
)
from tests.conftest import make_ingredient, make_recipe


@pytest.fixture
def recipe_service(db_session):
    return RecipeService(db_session)


def _input(**overrides) -> RecipeInput:
    payload = {"name": "Domates Çorbası", "waste_percentage": 5, "yield_amount": 4}
    payload.update(overrides)
    return RecipeInput(**payload)


class TestRecipeCreate:
    """Tests for RecipeService.create()"""

    def test_create_with_library_lines(self, recipe_service, seed_outlet, seed_ingredients):
        tomato, oil = seed_ingredients
        data = _input(
            recipe_no="RCP-2026-010",
            sale_price=30,
            ingredients=[
                {"ingredient_id": tomato.id, "quantity": 2},
                {"ingredient_id": oil.id, "quantity": 1, "unit": "ml", "prep_detail": "soğuk"},
            ],
        )

        detail = recipe_service.create(seed_outlet.id, data)

        assert detail.recipe_no == "RCP-2026-010"
        assert [line.ingredient_name for line in detail.lines] == ["Domates", "Zeytinyağı"]
        assert [line.sort_order for line in detail.lines] == [0, 1]
        assert detail.lines[0].unit == "kg"
        assert detail.lines[1].unit == "ml"
        assert detail.cost.total_cost == pytest.approx(21)
        assert detail.cost_per_yield_unit == pytest.approx(5.25)
        assert detail.profit_margin == pytest.approx(30)

    def test_blank_recipe_no_is_generated(self, recipe_service, seed_outlet):
        first = recipe_service.create(seed_outlet.id, _input(recipe_no=""))
        second = recipe_service.create(seed_outlet.id, _input(name="Mercimek"))

        prefix, year, seq = first.recipe_no.split("-")
        assert prefix == "RCP"
        assert seq == "001"
        assert second.recipe_no == f"RCP-{year}-002"

    def test_free_text_ingredient_is_created_in_library(
        self, recipe_service, seed_outlet, db_session
    ):
        data = _input(
            ingredients=[
                {"ingredient_name": "Kekik", "quantity": 0.1, "unit": "gr", "cost_per_unit": 400},
            ],
        )

        detail = recipe_service.create(seed_outlet.id, data)

        ingredient = db_session.query(Ingredient).filter_by(name="Kekik").one()
        assert ingredient.base_unit == "gr"
        assert ingredient.cost_per_unit == 400
        assert detail.lines[0].ingredient_id == ingredient.id

    def test_free_text_without_unit_defaults_to_kg(self, recipe_service, seed_outlet, db_session):
        recipe_service.create(
            seed_outlet.id, _input(ingredients=[{"ingredient_name": "Nane", "quantity": 1}])
        )

        ingredient = db_session.query(Ingredient).filter_by(name="Nane").one()
        assert ingredient.base_unit == "kg"
        assert ingredient.cost_per_unit == 0

    def test_free_text_matches_existing_name_case_insensitively(
        self, recipe_service, seed_outlet, seed_ingredients, db_session
    ):
        tomato, _ = seed_ingredients

        detail = recipe_service.create(
            seed_outlet.id, _input(ingredients=[{"ingredient_name": "domates", "quantity": 1}])
        )

        assert detail.lines[0].ingredient_id == tomato.id
        assert db_session.query(Ingredient).count() == 2

    def test_free_text_matches_turkish_capitals(self, recipe_service, seed_outlet, db_session):
        sugar = make_ingredient(db_session, "Şeker", 30)

        detail = recipe_service.create(
            seed_outlet.id,
            _input(
                ingredients=[
                    {"ingredient_name": "ŞEKER", "quantity": 1},
                    {"ingredient_name": " şeker ", "quantity": 1},
                ],
            ),
        )

        assert [line.ingredient_id for line in detail.lines] == [sugar.id, sugar.id]
        assert db_session.query(Ingredient).count() == 1
        assert detail.lines[0].line_cost == pytest.approx(30)

    def test_renamed_ingredient_is_found_by_its_new_name(
        self, recipe_service, seed_outlet, seed_ingredients, db_session
    ):
        tomato, _ = seed_ingredients
        tomato.name = "Çeri Domates"
        db_session.commit()

        detail = recipe_service.create(
            seed_outlet.id, _input(ingredients=[{"ingredient_name": "ÇERİ DOMATES", "quantity": 1}])
        )

        assert detail.lines[0].ingredient_id == tomato.id

    def test_blank_rows_are_dropped(self, recipe_service, seed_outlet, seed_ingredients):
        tomato, _ = seed_ingredients
        data = _input(
            ingredients=[
                {"ingredient_id": "", "ingredient_name": "", "quantity": 1},
                {"ingredient_id": tomato.id, "quantity": 1},
            ],
        )

        detail = recipe_service.create(seed_outlet.id, data)

        assert len(detail.lines) == 1
        assert detail.ingredient_count == 1

    def test_unknown_outlet(self, recipe_service):
        with pytest.raises(NotFoundError):
            recipe_service.create(9999, _input())

    def test_duplicate_recipe_no(self, recipe_service, seed_outlet, seed_recipe):
        with pytest.raises(DuplicateEntityError):
            recipe_service.create(seed_outlet.id, _input(recipe_no=seed_recipe.recipe_no))

    def test_other_integrity_errors_are_not_duplicates(
        self, recipe_service, seed_outlet, db_session, monkeypatch
    ):
        def fail_commit(db):
            raise IntegrityError(
                "INSERT INTO recipe_ingredient", {}, Exception("FOREIGN KEY constraint failed")
            )

        monkeypatch.setattr(recipe_service_module, "safe_commit", fail_commit)

        with pytest.raises(ConflictError) as exc_info:
            recipe_service.create(seed_outlet.id, _input(recipe_no="RCP-2026-050"))

        assert not isinstance(exc_info.value, DuplicateEntityError)
        assert exc_info.value.status_code == 409
        assert exc_info.value.detail == ErrorMessages.CONCURRENT_CHANGE
        assert db_session.query(Recipe).count() == 0

    def test_category_of_another_outlet_rejected(
        self, recipe_service, seed_outlet, db_session
    ):
        from kitchen_api.models import Category, Outlet

        other = Outlet(name="Beşiktaş Şube")
        db_session.add(other)
        db_session.flush()
        foreign = Category(outlet_id=other.id, name="Tatlılar")
        db_session.add(foreign)
        db_session.commit()

        with pytest.raises(ValidationError):
            recipe_service.create(seed_outlet.id, _input(category_id=foreign.id))

    def test_unknown_ingredient_id_rejected(self, recipe_service, seed_outlet, db_session):
        with pytest.raises(ValidationError) as exc_info:
            recipe_service.create(
                seed_outlet.id, _input(ingredients=[{"ingredient_id": 4242, "quantity": 1}])
            )

        assert "Satır 1" in exc_info.value.detail
        assert db_session.query(Recipe).count() == 0


class TestRecipeUpdate:
    """Tests for RecipeService.update()"""

    def test_overwrite_replaces_lines(
        self, recipe_service, seed_recipe, seed_ingredients, db_session
    ):
        _, oil = seed_ingredients

        detail = recipe_service.update(
            seed_recipe.id,
            _input(ingredients=[{"ingredient_id": oil.id, "quantity": 3}]),
        )

        assert detail.recipe_no == "RCP-2026-001"
        assert len(detail.lines) == 1
        assert detail.lines[0].ingredient_name == "Zeytinyağı"
        assert detail.cost.ingredients_cost == pytest.approx(30)

    def test_failed_save_keeps_previous_lines(
        self, recipe_service, seed_recipe, db_session
    ):
        with pytest.raises(ValidationError):
            recipe_service.update(
                seed_recipe.id,
                _input(
                    name="Yeni Ad",
                    ingredients=[
                        {"ingredient_name": "Yeni Malzeme", "quantity": 1},
                        {"ingredient_id": 4242, "quantity": 1},
                    ],
                ),
            )

        reloaded = recipe_service.get_detail(seed_recipe.id)
        assert reloaded.name == "Domates Çorbası"
        assert [line.ingredient_name for line in reloaded.lines] == ["Domates", "Zeytinyağı"]
        assert db_session.query(Ingredient).filter_by(name="Yeni Malzeme").count() == 0

    def test_keeping_own_recipe_no_is_allowed(self, recipe_service, seed_recipe):
        detail = recipe_service.update(seed_recipe.id, _input(recipe_no="RCP-2026-001"))

        assert detail.recipe_no == "RCP-2026-001"

    def test_taking_another_recipes_number_fails(
        self, recipe_service, seed_outlet, seed_recipe, db_session
    ):
        other = make_recipe(db_session, seed_outlet, "RCP-2026-002", "Pilav")

        with pytest.raises(DuplicateEntityError):
            recipe_service.update(other.id, _input(recipe_no="RCP-2026-001"))

    def test_unknown_recipe(self, recipe_service):
        with pytest.raises(NotFoundError):
            recipe_service.update(9999, _input())


class TestRecipeReads:
    def test_detail_has_active_allergens(self, recipe_service, seed_recipe):
        detail = recipe_service.get_detail(seed_recipe.id)

        assert detail.active_allergens == ["Gluten", "Süt"]
        assert detail.category_name == "Ana Yemekler"
        assert detail.outlet_name == "Kadıköy Şube"

    def test_search_matches_outlet_name(self, recipe_service, seed_recipe):
        results = recipe_service.search(search="kadıköy")

        assert [r.id for r in results] == [seed_recipe.id]

    def test_list_for_unknown_outlet(self, recipe_service):
        with pytest.raises(NotFoundError):
            recipe_service.list_for_outlet(9999)

    def test_generate_recipe_no_follows_latest(self, recipe_service, seed_recipe):
        assert recipe_service.generate_recipe_no(2026) == "RCP-2026-002"

    def test_delete(self, recipe_service, seed_recipe, db_session):
        recipe_service.delete(seed_recipe.id)

        assert db_session.query(Recipe).count() == 0


class TestCategoryDeleteKeepsRecipes:
    """Deleting a category leaves its recipes on the outlet, uncategorized."""

    def test_three_recipes_become_uncategorized(
        self, db_session, seed_outlet, seed_category, seed_ingredients
    ):
        tomato, _ = seed_ingredients
        for index in range(3):
            make_recipe(
                db_session,
                seed_outlet,
                f"RCP-2026-{index + 1:03d}",
                f"Tarif {index + 1}",
                lines=[(tomato, 1)],
                category=seed_category,
            )

        detached = CategoryService(db_session).delete(seed_category.id)

        listing = RecipeService(db_session).list_for_outlet(seed_outlet.id)
        assert detached == 3
        assert len(listing) == 3
        assert all(r.category_id is None and r.category_name is None for r in listing)
