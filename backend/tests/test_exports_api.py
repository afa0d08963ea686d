"""
Tests for the report download endpoints.
"""

from io import BytesIO
from urllib.parse import quote

from openpyxl import load_workbook

from kitchen_api.routers.exports import content_disposition
from kitchen_api.services.exports import excel, pdf

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
EXPORT_FAILED = "Dışa aktarma sırasında bir hata oluştu"


def _boom(*args, **kwargs):
    raise RuntimeError("renderer exploded")


class TestContentDisposition:
    def test_ascii_fallback_and_utf8_name(self):
        header = content_disposition("Kadıköy_Şube_Rapor_19_Ekim_2026.pdf")

        assert header.startswith("attachment; ")
        assert 'filename="Kadikoy_Sube_Rapor_19_Ekim_2026.pdf"' in header
        assert "filename*=UTF-8''" + quote("Kadıköy_Şube_Rapor_19_Ekim_2026.pdf") in header

    def test_dotted_capital_i(self):
        header = content_disposition("İzmir.xlsx")

        assert 'filename="Izmir.xlsx"' in header


class TestOutletExports:
    def test_outlet_xlsx(self, client, seed_recipe, seed_outlet):
        response = client.get(f"/api/exports/outlets/{seed_outlet.id}", params={"format": "xlsx"})

        assert response.status_code == 200
        assert response.headers["content-type"] == XLSX
        assert "filename*=UTF-8''" in response.headers["content-disposition"]
        assert "_Rapor_" in response.headers["content-disposition"]

        wb = load_workbook(BytesIO(response.content))
        assert "Ana Yemekler" in wb.sheetnames

    def test_outlet_pdf_is_default(self, client, seed_recipe, seed_outlet):
        response = client.get(f"/api/exports/outlets/{seed_outlet.id}")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")

    def test_menu_pdf(self, client, seed_recipe, seed_outlet):
        response = client.get(f"/api/exports/outlets/{seed_outlet.id}/menu", params={"format": "pdf"})

        assert response.status_code == 200
        assert "_Menu_" in response.headers["content-disposition"]

    def test_unknown_outlet(self, client):
        response = client.get("/api/exports/outlets/999", params={"format": "xlsx"})

        assert response.status_code == 404
        assert response.json()["detail"] == "Restoran bulunamadı (ID: 999)"

    def test_invalid_format(self, client, seed_outlet):
        response = client.get(f"/api/exports/outlets/{seed_outlet.id}", params={"format": "docx"})

        assert response.status_code == 422

    def test_generation_failure_returns_generic_message(self, client, seed_recipe, seed_outlet, monkeypatch):
        monkeypatch.setattr(excel, "build_outlet_workbook", _boom)

        response = client.get(f"/api/exports/outlets/{seed_outlet.id}", params={"format": "xlsx"})

        assert response.status_code == 500
        assert response.json()["detail"] == EXPORT_FAILED


class TestRecipeExports:
    def test_recipe_xlsx(self, client, seed_recipe):
        response = client.get(f"/api/exports/recipes/{seed_recipe.id}", params={"format": "xlsx"})

        assert response.status_code == 200
        assert quote("RCP-2026-001_Domates_Çorbası.xlsx") in response.headers["content-disposition"]

    def test_unknown_recipe(self, client):
        response = client.get("/api/exports/recipes/999")

        assert response.status_code == 404

    def test_pdf_failure(self, client, seed_recipe, monkeypatch):
        monkeypatch.setattr(pdf, "build_recipe_pdf", _boom)

        response = client.get(f"/api/exports/recipes/{seed_recipe.id}", params={"format": "pdf"})

        assert response.status_code == 500
        assert response.json()["detail"] == EXPORT_FAILED


class TestIngredientExports:
    def test_ingredients_xlsx(self, client, seed_ingredients):
        response = client.get("/api/exports/ingredients", params={"format": "xlsx"})

        assert response.status_code == 200
        wb = load_workbook(BytesIO(response.content))
        assert wb.sheetnames == ["Tum Malzemeler", "Sebze", "Yağ"]

    def test_empty_library_pdf(self, client):
        response = client.get("/api/exports/ingredients")

        assert response.status_code == 200
        assert response.content.startswith(b"%PDF")
