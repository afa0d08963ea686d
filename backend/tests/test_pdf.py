"""
Tests for PDF report generation.

Page content streams are compressed, so assertions stick to the document
structure (the PDF header, the page tree count, the filename) and to the
footer text recorded on the canvas.
"""

import re
from datetime import datetime

import pytest

from kitchen_api.services.exports import pdf
from kitchen_api.services.exports.data import (
    ExportCategory,
    ExportIngredient,
    ExportLine,
    ExportOutlet,
    ExportRecipe,
    OutletReport,
    RecipeReport,
)
from kitchen_api.services.exports.pdf import (
    build_ingredients_pdf,
    build_menu_pdf,
    build_outlet_pdf,
    build_recipe_pdf,
)
from shared.config.settings import settings

NOW = datetime(2026, 10, 19, 14, 5)
_PAGE_COUNT = re.compile(rb"/Count\s+(\d+)")


def _page_count(content: bytes) -> int:
    # The outline tree also carries a /Count (0); the page tree holds the largest
    return max(int(n) for n in _PAGE_COUNT.findall(content))


@pytest.fixture
def footer_lines(monkeypatch):
    """Text drawn by the page footers, one list per page in page order."""
    pages: list[list[str]] = []

    class FooterRecorder(pdf.NumberedCanvas):
        _drawn = None

        def _draw_footer(self, total):
            self._drawn = []
            super()._draw_footer(total)
            pages.append(self._drawn)
            self._drawn = None

        def _record(self, text):
            if self._drawn is not None:
                self._drawn.append(text)

        def drawCentredString(self, x, y, text, *args, **kwargs):
            self._record(text)
            return super().drawCentredString(x, y, text, *args, **kwargs)

        def drawString(self, x, y, text, *args, **kwargs):
            self._record(text)
            return super().drawString(x, y, text, *args, **kwargs)

        def drawRightString(self, x, y, text, *args, **kwargs):
            self._record(text)
            return super().drawRightString(x, y, text, *args, **kwargs)

    monkeypatch.setattr(pdf, "NumberedCanvas", FooterRecorder)
    return pages


def _recipe(recipe_id: int, category_id=10, **kwargs) -> ExportRecipe:
    fields = {
        "id": recipe_id,
        "recipe_no": f"RCP-2026-{recipe_id:03d}",
        "name": f"Tarif {recipe_id}",
        "category_id": category_id,
        "category_name": "Ana Yemekler" if category_id else None,
        "difficulty": "Medium",
        "prep_time": 30,
        "waste_percentage": 5,
        "yield_amount": 4,
        "sale_price": 30,
        "instructions": "Doğra.\nPişir & servis et <sıcak>.",
        "critical_details": "Tuzu en son ekle.",
        "allergens": {"gluten": True, "milk": True},
        "lines": (
            ExportLine("Domates", 2, "kg", "doğranmış", 5),
            ExportLine("Zeytinyağı", 1, "lt", None, 10),
        ),
    }
    fields.update(kwargs)
    return ExportRecipe(**fields)


def _report(*recipes) -> OutletReport:
    return OutletReport(
        outlet=ExportOutlet(
            id=1,
            name="Kadıköy Şube",
            type="Restoran",
            location="İstanbul",
            status="active",
            created_at=NOW,
        ),
        categories=(ExportCategory(id=10, name="Ana Yemekler"),),
        recipes=tuple(recipes),
    )


class TestOutletPdf:
    def test_renders_pdf(self):
        export = build_outlet_pdf(_report(_recipe(1)), now=NOW)

        assert export.content.startswith(b"%PDF")
        assert export.media_type == "application/pdf"
        assert export.filename == "Kadıköy_Şube_Rapor_19_Ekim_2026.pdf"
        assert _page_count(export.content) >= 1

    def test_empty_outlet(self):
        export = build_outlet_pdf(_report(), now=NOW)

        assert export.content.startswith(b"%PDF")
        assert _page_count(export.content) == 1

    def test_many_recipes_span_several_pages(self):
        recipes = [_recipe(i) for i in range(1, 16)]
        recipes.append(_recipe(99, category_id=None, name="Ayran"))

        export = build_outlet_pdf(_report(*recipes), now=NOW)

        assert _page_count(export.content) > 1

    def test_footer_numbers_every_page(self, footer_lines):
        recipes = [_recipe(i) for i in range(1, 16)]

        export = build_outlet_pdf(_report(*recipes), now=NOW)

        total = _page_count(export.content)
        assert total > 1
        assert footer_lines == [
            [f"Sayfa {page} / {total}", settings.product_name, "19 Ekim 2026"]
            for page in range(1, total + 1)
        ]


class TestOtherPdfs:
    def test_menu(self):
        export = build_menu_pdf(_report(_recipe(1), _recipe(2, category_id=None)), now=NOW)

        assert export.content.startswith(b"%PDF")
        assert export.filename == "Kadıköy_Şube_Menu_19_Ekim_2026.pdf"

    def test_recipe(self):
        report = RecipeReport(recipe=_recipe(1, name="Domates Çorbası"), outlet_name="Kadıköy Şube")

        export = build_recipe_pdf(report, now=NOW)

        assert export.content.startswith(b"%PDF")
        assert export.filename == "RCP-2026-001_Domates_Çorbası.pdf"

    def test_recipe_without_lines_or_price(self):
        recipe = _recipe(1, lines=(), sale_price=None, instructions=None, critical_details=None)

        export = build_recipe_pdf(RecipeReport(recipe=recipe), now=NOW)

        assert export.content.startswith(b"%PDF")

    def test_ingredients(self):
        ingredients = [
            ExportIngredient("Domates", "kg", 5, "M-001", "Sebze", "Hal"),
            ExportIngredient("Tuz", "kg", 8),
        ]

        export = build_ingredients_pdf(ingredients, now=NOW)

        assert export.content.startswith(b"%PDF")
        assert export.filename == "Malzeme_Kutuphanesi_19_Ekim_2026.pdf"

    def test_empty_ingredient_library(self):
        export = build_ingredients_pdf([], now=NOW)

        assert _page_count(export.content) == 1
