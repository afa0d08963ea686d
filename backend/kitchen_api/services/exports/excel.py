"""
XLSX report generation with openpyxl.

Four workbooks: outlet report, menu, single recipe and the ingredient
library. Category sheets hold one block per recipe:

    TARIF: <name>
    <metadata rows>
    Alerjenler
    Malzemeler:
    <header row> + one row per ingredient line
    Hazirlanis: / Kritik Detaylar:
    ----------------------------------------

Workbooks are built in memory and serialized only once complete.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from io import BytesIO
from typing import Any, Iterable, Optional

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from shared.config.constants import (
    ALLERGEN_KEYS,
    EMPTY_LABEL,
    Limits,
    allergen_label,
    difficulty_label,
    outlet_status_label,
    recipe_status_label,
)

from .data import (
    UNCATEGORIZED_LABEL,
    XLSX_MEDIA_TYPE,
    ExportFile,
    ExportIngredient,
    ExportRecipe,
    OutletReport,
    RecipeReport,
    group_ingredients,
)
from .formatting import (
    filename_date,
    format_currency,
    format_date,
    format_number,
    format_percentage,
    sanitize_filename,
)

SEPARATOR = "-" * 40
NO_ALLERGENS = "Yok"

_BOLD = Font(bold=True)
_TITLE = Font(bold=True, size=14)
_INVALID_SHEET_CHARS = re.compile(r"[\\/*?\[\]:]")

# Column widths (characters)
SUMMARY_WIDTHS = [25, 45]
ALL_RECIPES_WIDTHS = [12, 35, 20, 10, 12, 18, 8, 18, 18, 18, 12]
CATEGORY_WIDTHS = [25, 15, 12, 25, 18]
USAGE_WIDTHS = [30, 18, 12, 30]
MENU_SUMMARY_WIDTHS = [18, 12, 35, 10, 18, 18, 12]
MENU_CATEGORY_WIDTHS = [25, 15, 12, 25]
RECIPE_INFO_WIDTHS = [25, 60]
RECIPE_LINES_WIDTHS = [28, 12, 12, 28, 18, 18]
ALLERGEN_WIDTHS = [28, 15]
INGREDIENTS_WIDTHS = [15, 32, 22, 12, 18, 28]
INGREDIENT_CATEGORY_WIDTHS = [15, 32, 12, 18, 28]


# =============================================================================
# Sheet helpers
# =============================================================================


def sheet_title(name: str, taken: set[str], fallback: str = "Sayfa") -> str:
    """
    Worksheet title derived from a free-text name.

    Strips the characters Excel forbids, truncates to 28 characters and
    suffixes " (n)" when the title is already used (case-insensitively),
    so the result is never empty and never longer than 31 characters.
    The chosen title is added to ``taken``.
    """
    base = _INVALID_SHEET_CHARS.sub("", name).strip()[: Limits.SHEET_NAME_TRUNCATE].strip()
    base = base or fallback

    title = base
    counter = 2
    while title.lower() in taken:
        suffix = f" ({counter})"
        title = base[: Limits.MAX_SHEET_NAME_LENGTH - len(suffix)] + suffix
        counter += 1

    taken.add(title.lower())
    return title


class _Sheet:
    """Row-by-row writer over a worksheet."""

    def __init__(self, ws: Worksheet, widths: Iterable[int]):
        self.ws = ws
        self._row = 0
        for index, width in enumerate(widths, start=1):
            ws.column_dimensions[get_column_letter(index)].width = width

    def row(self, *values: Any, font: Optional[Font] = None) -> None:
        self._row += 1
        for column, value in enumerate(values, start=1):
            cell = self.ws.cell(row=self._row, column=column, value=value)
            # Free text starting with '=' is data, not a formula
            if isinstance(value, str) and value.startswith("="):
                cell.data_type = "s"
            if font is not None:
                cell.font = font

    def header(self, *values: Any) -> None:
        self.row(*values, font=_BOLD)

    def blank(self) -> None:
        self._row += 1


class _WorkbookBuilder:
    def __init__(self, reserved: Iterable[str] = ()):
        self.wb = Workbook()
        self._first = True
        self.taken: set[str] = {name.lower() for name in reserved}

    def sheet(self, title: str, widths: Iterable[int], *, fixed: bool = False) -> _Sheet:
        """New worksheet; fixed titles were reserved up front and are used as-is."""
        if not fixed:
            title = sheet_title(title, self.taken)
        if self._first:
            ws = self.wb.active
            ws.title = title
            self._first = False
        else:
            ws = self.wb.create_sheet(title)
        return _Sheet(ws, widths)

    def to_bytes(self) -> bytes:
        buffer = BytesIO()
        self.wb.save(buffer)
        return buffer.getvalue()


def _xlsx(content: bytes, filename: str) -> ExportFile:
    return ExportFile(content=content, filename=filename, media_type=XLSX_MEDIA_TYPE)


# =============================================================================
# Recipe blocks
# =============================================================================


def _allergen_text(recipe: ExportRecipe) -> str:
    return ", ".join(recipe.active_allergens) or NO_ALLERGENS


def _prep_time(recipe: ExportRecipe, unit: str = "dk") -> str:
    return f"{recipe.prep_time} {unit}" if recipe.prep_time else EMPTY_LABEL


def _write_text_block(sheet: _Sheet, label: str, text: Optional[str]) -> None:
    if text:
        sheet.blank()
        sheet.row(label, font=_BOLD)
        sheet.row(text)


def _write_recipe_block(sheet: _Sheet, recipe: ExportRecipe) -> None:
    """Detailed block of the outlet report's category sheets."""
    cost = recipe.cost
    sheet.blank()
    sheet.row(f"TARIF: {recipe.name}", font=_BOLD)
    sheet.row("Tarif No", recipe.recipe_no)
    sheet.row("Zorluk", difficulty_label(recipe.difficulty))
    sheet.row("Hazirlik Suresi", _prep_time(recipe))
    sheet.row("Porsiyon", recipe.yield_label)
    sheet.row("Fire Orani", recipe.waste_label)
    sheet.row("Satis Fiyati", format_currency(recipe.sale_price))
    sheet.row("Maliyet", format_currency(cost.total_cost))
    sheet.row("Kar Marji", format_percentage(cost.profit_margin))
    sheet.row("Alerjenler", _allergen_text(recipe))

    if recipe.lines:
        sheet.blank()
        sheet.row("Malzemeler:", font=_BOLD)
        sheet.header("Malzeme", "Miktar", "Birim", "Hazirlik", "Maliyet")
        for line in recipe.lines:
            sheet.row(
                line.ingredient_name,
                format_number(line.quantity, 2),
                line.unit,
                line.prep_detail or EMPTY_LABEL,
                format_currency(line.line_cost),
            )

    _write_text_block(sheet, "Hazirlanis:", recipe.instructions)
    _write_text_block(sheet, "Kritik Detaylar:", recipe.critical_details)

    sheet.blank()
    sheet.row(SEPARATOR)


def _write_short_recipe_block(sheet: _Sheet, recipe: ExportRecipe) -> None:
    """Abbreviated block of the outlet report's uncategorized sheet."""
    sheet.blank()
    sheet.row(f"TARIF: {recipe.name}", font=_BOLD)
    sheet.row("Tarif No", recipe.recipe_no)
    sheet.row("Satis Fiyati", format_currency(recipe.sale_price))
    sheet.row("Maliyet", format_currency(recipe.cost.total_cost))

    if recipe.lines:
        sheet.blank()
        sheet.row("Malzemeler:", font=_BOLD)
        for line in recipe.lines:
            sheet.row(line.ingredient_name, format_number(line.quantity, 2), line.unit)

    sheet.row(SEPARATOR)


def _write_menu_recipe_block(sheet: _Sheet, recipe: ExportRecipe) -> None:
    """Menu block: no prep time, waste, margin or critical details."""
    sheet.blank()
    sheet.row(f"TARIF: {recipe.name}", font=_BOLD)
    sheet.row("Tarif No", recipe.recipe_no)
    sheet.row("Zorluk", difficulty_label(recipe.difficulty))
    sheet.row("Porsiyon", recipe.yield_label)
    sheet.row("Satis Fiyati", format_currency(recipe.sale_price))
    sheet.row("Maliyet", format_currency(recipe.cost.total_cost))
    sheet.row("Alerjenler", _allergen_text(recipe))

    if recipe.lines:
        sheet.blank()
        sheet.row("Malzemeler:", font=_BOLD)
        sheet.header("Malzeme", "Miktar", "Birim", "Hazirlik")
        for line in recipe.lines:
            sheet.row(
                line.ingredient_name,
                format_number(line.quantity, 2),
                line.unit,
                line.prep_detail or EMPTY_LABEL,
            )

    _write_text_block(sheet, "Hazirlanis:", recipe.instructions)

    sheet.row(SEPARATOR)


# =============================================================================
# Ingredient usage rollup
# =============================================================================


@dataclass
class IngredientUsage:
    """Summed quantity of one ingredient name across an outlet's recipes."""

    name: str
    total_quantity: float
    unit: str
    other_units: list[str] = field(default_factory=list)

    @property
    def note(self) -> str:
        if not self.other_units:
            return ""
        return "Farkli birimler: " + ", ".join(self.other_units)


def rollup_ingredient_usage(recipes: Iterable[ExportRecipe]) -> list[IngredientUsage]:
    """
    Merge every line by ingredient name, in first-seen order.

    Quantities are summed as-is and the row carries the unit of the first
    line seen. Units that differ from it are listed in ``other_units`` so a
    mixed-unit total is visible in the sheet.
    """
    usage: dict[str, IngredientUsage] = {}
    for recipe in recipes:
        for line in recipe.lines:
            row = usage.get(line.ingredient_name)
            if row is None:
                usage[line.ingredient_name] = IngredientUsage(
                    name=line.ingredient_name,
                    total_quantity=line.quantity,
                    unit=line.unit,
                )
                continue
            row.total_quantity += line.quantity
            if line.unit != row.unit and line.unit not in row.other_units:
                row.other_units.append(line.unit)
    return list(usage.values())


# =============================================================================
# Workbooks
# =============================================================================


def build_outlet_workbook(report: OutletReport, now: Optional[datetime] = None) -> ExportFile:
    """Outlet report: summary, flat listing, category sheets, uncategorized, usage."""
    now = now or datetime.now()
    outlet = report.outlet
    book = _WorkbookBuilder(
        reserved=["Ozet", "Tum Tarifler", UNCATEGORIZED_LABEL, "Malzeme Ozeti"]
    )

    # Ozet
    summary = book.sheet("Ozet", SUMMARY_WIDTHS, fixed=True)
    summary.row("RESTORAN RAPORU", font=_TITLE)
    summary.blank()
    summary.row("Genel Bilgiler", font=_BOLD)
    summary.row("Restoran Adi", outlet.name)
    summary.row("Tur", outlet.type or EMPTY_LABEL)
    summary.row("Konum", outlet.location or EMPTY_LABEL)
    summary.row("Durum", outlet_status_label(outlet.status))
    summary.row("Olusturulma Tarihi", format_date(outlet.created_at))
    summary.blank()
    summary.row("Istatistikler", font=_BOLD)
    summary.row("Toplam Tarif", len(report.recipes))
    summary.row("Kategori Sayisi", len(report.categories))
    summary.row("Toplam Maliyet", format_currency(report.total_cost))
    summary.row("Toplam Satis", format_currency(report.total_sale))
    summary.row("Toplam Kar", format_currency(report.total_sale - report.total_cost))
    summary.blank()
    summary.row("Rapor Tarihi", format_date(now))

    # Tum Tarifler
    listing = book.sheet("Tum Tarifler", ALL_RECIPES_WIDTHS, fixed=True)
    listing.header(
        "Tarif No", "Tarif Adi", "Kategori", "Zorluk", "Hazirlik (dk)",
        "Porsiyon", "Fire %", "Satis Fiyati", "Maliyet", "Kar", "Kar Marji",
    )
    for recipe in report.recipes:
        cost = recipe.cost
        listing.row(
            recipe.recipe_no,
            recipe.name,
            recipe.category_label,
            difficulty_label(recipe.difficulty),
            recipe.prep_time or EMPTY_LABEL,
            recipe.yield_label,
            cost.waste_percentage,
            format_currency(recipe.sale_price),
            format_currency(cost.total_cost),
            format_currency(cost.profit),
            format_percentage(cost.profit_margin),
        )

    # One sheet per non-empty category
    for category, recipes in report.grouped():
        sheet = book.sheet(category.name, CATEGORY_WIDTHS)
        for recipe in recipes:
            _write_recipe_block(sheet, recipe)

    uncategorized = report.uncategorized
    if uncategorized:
        sheet = book.sheet(UNCATEGORIZED_LABEL, CATEGORY_WIDTHS, fixed=True)
        for recipe in uncategorized:
            _write_short_recipe_block(sheet, recipe)

    # Malzeme Ozeti
    usage_sheet = book.sheet("Malzeme Ozeti", USAGE_WIDTHS, fixed=True)
    usage_sheet.header("Malzeme Adi", "Toplam Miktar", "Birim", "Not")
    for usage in rollup_ingredient_usage(report.recipes):
        usage_sheet.row(
            usage.name,
            format_number(usage.total_quantity, 2),
            usage.unit,
            usage.note,
        )

    filename = f"{sanitize_filename(outlet.name)}_Rapor_{filename_date(now)}.xlsx"
    return _xlsx(book.to_bytes(), filename)


def build_menu_workbook(report: OutletReport, now: Optional[datetime] = None) -> ExportFile:
    """Menu: grouped summary listing plus one detailed sheet per category."""
    now = now or datetime.now()
    book = _WorkbookBuilder(reserved=["Menu Ozet"])

    summary = book.sheet("Menu Ozet", MENU_SUMMARY_WIDTHS, fixed=True)
    summary.header("Kategori", "Tarif No", "Tarif Adi", "Zorluk", "Satis", "Maliyet", "Kar Marji")

    groups = [(category.name, recipes) for category, recipes in report.grouped()]
    if report.uncategorized:
        groups.append((UNCATEGORIZED_LABEL, report.uncategorized))

    for category_name, recipes in groups:
        for recipe in recipes:
            cost = recipe.cost
            summary.row(
                category_name,
                recipe.recipe_no,
                recipe.name,
                difficulty_label(recipe.difficulty),
                format_currency(recipe.sale_price),
                format_currency(cost.total_cost),
                format_percentage(cost.profit_margin),
            )

    for category, recipes in report.grouped():
        sheet = book.sheet(category.name, MENU_CATEGORY_WIDTHS)
        for recipe in recipes:
            _write_menu_recipe_block(sheet, recipe)

    filename = f"{sanitize_filename(report.outlet.name)}_Menu_{filename_date(now)}.xlsx"
    return _xlsx(book.to_bytes(), filename)


def build_recipe_workbook(report: RecipeReport) -> ExportFile:
    """Single recipe: info and cost analysis, ingredient lines, allergen matrix."""
    recipe = report.recipe
    cost = recipe.cost
    book = _WorkbookBuilder(reserved=["Tarif Bilgileri", "Malzemeler", "Alerjenler"])

    info = book.sheet("Tarif Bilgileri", RECIPE_INFO_WIDTHS, fixed=True)
    info.row("TARIF RAPORU", font=_TITLE)
    info.blank()
    info.row("Genel Bilgiler", font=_BOLD)
    info.row("Tarif No", recipe.recipe_no)
    info.row("Tarif Adi", recipe.name)
    info.row("Restoran", report.outlet_label)
    info.row("Kategori", report.category_label)
    info.row("Zorluk", difficulty_label(recipe.difficulty))
    info.row("Hazirlik Suresi", _prep_time(recipe, "dakika"))
    info.row("Porsiyon", recipe.yield_label)
    info.row("Fire Orani", format_percentage(cost.waste_percentage))
    info.row("Durum", recipe_status_label(recipe.status))
    info.blank()
    info.row("Maliyet Analizi", font=_BOLD)
    info.row("Malzeme Maliyeti", format_currency(cost.ingredients_cost))
    info.row("Fire Maliyeti", format_currency(cost.waste_cost))
    info.row("Toplam Maliyet", format_currency(cost.total_cost))
    info.row("Satis Fiyati", format_currency(recipe.sale_price))
    info.row("Kar", format_currency(cost.profit))
    info.row("Kar Marji", format_percentage(cost.profit_margin))
    info.blank()
    info.row("Hazirlanis", font=_BOLD)
    info.row(recipe.instructions or EMPTY_LABEL)
    info.blank()
    info.row("Kritik Detaylar", font=_BOLD)
    info.row(recipe.critical_details or EMPTY_LABEL)

    if recipe.lines:
        lines = book.sheet("Malzemeler", RECIPE_LINES_WIDTHS, fixed=True)
        lines.header("Malzeme", "Miktar", "Birim", "Hazirlik", "Birim Fiyat", "Toplam")
        for line in recipe.lines:
            lines.row(
                line.ingredient_name,
                format_number(line.quantity, 2),
                line.unit,
                line.prep_detail or EMPTY_LABEL,
                format_currency(line.cost_per_unit),
                format_currency(line.line_cost),
            )

    allergens = book.sheet("Alerjenler", ALLERGEN_WIDTHS, fixed=True)
    allergens.header("Alerjen", "Durum")
    for key in ALLERGEN_KEYS:
        allergens.row(allergen_label(key), "EVET" if recipe.allergens.get(key) else "Hayir")

    filename = f"{sanitize_filename(recipe.recipe_no)}_{sanitize_filename(recipe.name)}.xlsx"
    return _xlsx(book.to_bytes(), filename)


def build_ingredients_workbook(
    ingredients: list[ExportIngredient],
    now: Optional[datetime] = None,
) -> ExportFile:
    """Ingredient library: full listing plus one sheet per ingredient category."""
    now = now or datetime.now()
    book = _WorkbookBuilder(reserved=["Tum Malzemeler"])

    listing = book.sheet("Tum Malzemeler", INGREDIENTS_WIDTHS, fixed=True)
    listing.header("Malzeme No", "Malzeme Adi", "Kategori", "Birim", "Birim Fiyat", "Tedarikci")
    for ingredient in ingredients:
        listing.row(
            ingredient.ingredient_no or EMPTY_LABEL,
            ingredient.name,
            ingredient.category or EMPTY_LABEL,
            ingredient.base_unit,
            format_currency(ingredient.cost_per_unit),
            ingredient.supplier or EMPTY_LABEL,
        )

    for category, members in group_ingredients(ingredients):
        sheet = book.sheet(category, INGREDIENT_CATEGORY_WIDTHS)
        sheet.header("No", "Malzeme Adi", "Birim", "Fiyat", "Tedarikci")
        for ingredient in members:
            sheet.row(
                ingredient.ingredient_no or EMPTY_LABEL,
                ingredient.name,
                ingredient.base_unit,
                format_currency(ingredient.cost_per_unit),
                ingredient.supplier or EMPTY_LABEL,
            )

    filename = f"Malzeme_Kutuphanesi_{filename_date(now)}.xlsx"
    return _xlsx(book.to_bytes(), filename)
