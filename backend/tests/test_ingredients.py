"""
Tests for ingredient library and unit endpoints.
"""

from kitchen_api.models import Unit


class TestIngredientEndpoints:
    """Ingredient CRUD operations."""

    def test_create_ingredient(self, client):
        response = client.post(
            "/api/ingredients",
            json={
                "name": "Kırmızı Biber",
                "ingredient_no": "",
                "category": "Sebze",
                "base_unit": "kg",
                "cost_per_unit": 45.5,
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Kırmızı Biber"
        assert data["ingredient_no"] is None
        assert data["cost_per_unit"] == 45.5

    def test_negative_price_rejected(self, client):
        response = client.post(
            "/api/ingredients",
            json={"name": "Tuz", "base_unit": "kg", "cost_per_unit": -1},
        )

        assert response.status_code == 422
        assert response.json()["errors"] == ["0 veya daha büyük olmalı (cost_per_unit)"]

    def test_list_alphabetical(self, client, seed_ingredients):
        response = client.get("/api/ingredients")

        assert response.status_code == 200
        assert [i["name"] for i in response.json()] == ["Domates", "Zeytinyağı"]

    def test_search_and_limit(self, client, seed_ingredients):
        assert [i["name"] for i in client.get("/api/ingredients?search=zeytin").json()] == [
            "Zeytinyağı"
        ]
        assert len(client.get("/api/ingredients?limit=1").json()) == 1

    def test_filter_by_category(self, client, seed_ingredients):
        data = client.get("/api/ingredients?category=Sebze").json()

        assert [i["name"] for i in data] == ["Domates"]

    def test_update_price(self, client, seed_recipe, seed_ingredients):
        tomato, _ = seed_ingredients

        response = client.put(
            f"/api/ingredients/{tomato.id}",
            json={"name": "Domates", "base_unit": "kg", "cost_per_unit": 10},
        )

        assert response.status_code == 200
        # 2 x 10 + 1 x 10 with 5% waste
        recipe = client.get(f"/api/recipes/{seed_recipe.id}").json()
        assert recipe["total_cost"] == 31.5

    def test_delete_unused_ingredient(self, client, seed_ingredients):
        tomato, _ = seed_ingredients

        assert client.delete(f"/api/ingredients/{tomato.id}").status_code == 204
        assert client.get(f"/api/ingredients/{tomato.id}").status_code == 404

    def test_delete_ingredient_in_use(self, client, seed_recipe, seed_ingredients):
        tomato, _ = seed_ingredients

        response = client.delete(f"/api/ingredients/{tomato.id}")

        assert response.status_code == 409
        assert response.json()["detail"] == "Malzeme 1 tarifte kullanılıyor, silinemez"


class TestUnitEndpoints:
    """Unit vocabulary."""

    def test_default_units_are_seeded(self, client, db_session):
        from kitchen_api.seed import seed_units

        assert seed_units(db_session) == 10
        assert seed_units(db_session) == 0

        names = [u["name"] for u in client.get("/api/units").json()]
        assert "Kilogram" in names
        assert len(names) == 10

    def test_create_and_delete_unit(self, client, db_session):
        response = client.post("/api/units", json={"name": "Tutam", "abbreviation": "tt"})

        assert response.status_code == 201
        unit_id = response.json()["id"]
        assert client.delete(f"/api/units/{unit_id}").status_code == 204
        assert db_session.query(Unit).count() == 0

    def test_duplicate_unit(self, client):
        client.post("/api/units", json={"name": "Tutam", "abbreviation": "tt"})

        response = client.post("/api/units", json={"name": "Tutam", "abbreviation": "t"})

        assert response.status_code == 409

    def test_delete_unknown_unit(self, client):
        assert client.delete("/api/units/9999").status_code == 404
