"""
Tests for the recipe cost calculator.
"""

import pytest

from kitchen_api.services.costing import (
    CostLine,
    calculate_profit_margin,
    calculate_recipe_cost,
    cost_of_recipe,
    effective_waste_percentage,
    line_cost,
)


class TestCalculateRecipeCost:
    """calculate_recipe_cost() arithmetic."""

    def test_reference_scenario(self):
        """2 x 5 + 1 x 10 with 5% waste, yield 4 and sale price 30."""
        cost = calculate_recipe_cost(
            [CostLine(2, 5), CostLine(1, 10)],
            waste_percentage=5,
            yield_amount=4,
            sale_price=30,
        )

        assert cost.ingredients_cost == pytest.approx(20)
        assert cost.waste_cost == pytest.approx(1)
        assert cost.total_cost == pytest.approx(21)
        assert cost.cost_per_yield_unit == pytest.approx(5.25)
        assert cost.profit == pytest.approx(9)
        assert cost.profit_margin == pytest.approx(30)

    def test_no_lines_costs_nothing(self):
        cost = calculate_recipe_cost([], waste_percentage=5, yield_amount=4)

        assert cost.ingredients_cost == 0
        assert cost.total_cost == 0
        assert cost.cost_per_yield_unit == 0

    @pytest.mark.parametrize("waste", [0, 5, 12.5, 50, 100])
    def test_total_is_ingredients_plus_waste(self, waste):
        cost = calculate_recipe_cost([(3, 7), (0.5, 12)], waste_percentage=waste)

        assert cost.total_cost == pytest.approx(cost.ingredients_cost * (1 + waste / 100))

    @pytest.mark.parametrize("yield_amount", [0, None, 0.5])
    def test_missing_or_small_yield_counts_as_one(self, yield_amount):
        cost = calculate_recipe_cost([(1, 10)], waste_percentage=0, yield_amount=yield_amount)

        assert cost.cost_per_yield_unit == pytest.approx(10)

    def test_missing_waste_uses_default(self):
        cost = calculate_recipe_cost([(1, 100)], waste_percentage=None)

        assert cost.waste_percentage == 5
        assert cost.total_cost == pytest.approx(105)

    def test_explicit_zero_waste_is_kept(self):
        cost = calculate_recipe_cost([(1, 100)], waste_percentage=0)

        assert cost.waste_cost == 0
        assert cost.total_cost == pytest.approx(100)

    def test_none_quantity_or_price_counts_as_zero(self):
        cost = calculate_recipe_cost([(None, 5), (2, None), (1, 3)], waste_percentage=0)

        assert cost.ingredients_cost == pytest.approx(3)


class TestProfitMargin:
    """calculate_profit_margin() edge cases."""

    @pytest.mark.parametrize("sale_price", [0, None])
    def test_no_sale_price_gives_zero_margin(self, sale_price):
        assert calculate_profit_margin(sale_price, 42) == 0

    def test_loss_gives_negative_margin(self):
        assert calculate_profit_margin(10, 15) == pytest.approx(-50)


class TestHelpers:
    def test_line_cost(self):
        assert line_cost(2.5, 4) == pytest.approx(10)

    def test_effective_waste_percentage(self):
        assert effective_waste_percentage(None) == 5
        assert effective_waste_percentage(0) == 0
        assert effective_waste_percentage(12) == 12


class TestCostOfRecipe:
    """cost_of_recipe() over ORM rows."""

    def test_uses_current_ingredient_prices(self, db_session, seed_recipe, seed_ingredients):
        tomato, _ = seed_ingredients
        assert cost_of_recipe(seed_recipe).total_cost == pytest.approx(21)

        tomato.cost_per_unit = 10
        db_session.commit()
        db_session.refresh(seed_recipe)

        # 2 x 10 + 1 x 10 = 30, plus 5% waste
        assert cost_of_recipe(seed_recipe).total_cost == pytest.approx(31.5)
