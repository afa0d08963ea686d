"""
PDF report generation with reportlab platypus (A4).

Page frame:
- first-page header: tinted band with title, subtitle, report id and time
- section headers as primary-color bars, subsections as tinted bars
- conditional page breaks before recipes, categories and long text blocks
- footer on every page ("Sayfa i / N", product name, date), drawn in a
  second pass once the page count is known

Documents are rendered into memory; bytes exist only after a full build.
"""

import os
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache, partial
from io import BytesIO
from typing import Any, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas
from reportlab.platypus import (
    CondPageBreak,
    Flowable,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from shared.config.constants import (
    EMPTY_LABEL,
    difficulty_label,
    outlet_status_label,
    recipe_status_label,
)
from shared.config.logging import export_logger as logger
from shared.config.settings import settings

from .data import (
    PDF_MEDIA_TYPE,
    UNCATEGORIZED_LABEL,
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
    format_datetime,
    format_number,
    format_percentage,
    generate_report_id,
    sanitize_filename,
)


def _rgb(r: int, g: int, b: int) -> colors.Color:
    return colors.Color(r / 255, g / 255, b / 255)


COLORS = {
    "primary": _rgb(37, 99, 235),
    "secondary": _rgb(100, 100, 100),
    "success": _rgb(22, 163, 74),
    "warning": _rgb(217, 119, 6),
    "danger": _rgb(220, 38, 38),
    "light": _rgb(245, 245, 245),
    "dark": _rgb(30, 30, 30),
}

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 14 * mm
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN

# Minimum space left on the page before a block starts (else new page)
RECIPE_BREAK = 80 * mm
CATEGORY_BREAK = 50 * mm
INGREDIENT_CATEGORY_BREAK = 40 * mm
INSTRUCTIONS_BREAK = 30 * mm
CRITICAL_BREAK = 20 * mm
RECIPE_SECTION_BREAK = 30 * mm
RECIPE_INSTRUCTIONS_BREAK = 40 * mm

META_SEPARATOR = "  |  "

FONT_NAME = "KitchenSans"
FONT_BOLD_NAME = "KitchenSans-Bold"


# =============================================================================
# Fonts and styles
# =============================================================================


@lru_cache
def register_fonts() -> tuple[str, str]:
    """
    Register the configured TTF fonts (Turkish glyphs) once.

    Returns (regular_font_name, bold_font_name). Falls back to Helvetica,
    which cannot render ğ/ş/ı, when the font files are missing.
    """
    regular_path = settings.pdf_font_path
    bold_path = settings.pdf_font_bold_path

    if not os.path.exists(regular_path):
        logger.warning("PDF font not found, using Helvetica", path=regular_path)
        return "Helvetica", "Helvetica-Bold"

    pdfmetrics.registerFont(TTFont(FONT_NAME, regular_path))
    if os.path.exists(bold_path):
        pdfmetrics.registerFont(TTFont(FONT_BOLD_NAME, bold_path))
        return FONT_NAME, FONT_BOLD_NAME

    logger.warning("PDF bold font not found, using regular weight", path=bold_path)
    return FONT_NAME, FONT_NAME


@dataclass(frozen=True)
class _Styles:
    font: str
    bold: str

    def style(
        self,
        size: float = 9,
        color: colors.Color = COLORS["dark"],
        *,
        bold: bool = False,
        align: int = 0,
        leading: Optional[float] = None,
    ) -> ParagraphStyle:
        return ParagraphStyle(
            name=f"s{size}{bold}{align}",
            fontName=self.bold if bold else self.font,
            fontSize=size,
            leading=leading or size * 1.3,
            textColor=color,
            alignment=align,
        )


def _text(value: Any) -> str:
    """Escape free text for Paragraph markup, keeping line breaks."""
    return escape(str(value)).replace("\n", "<br/>")


# =============================================================================
# Page frame
# =============================================================================


class NumberedCanvas(canvas.Canvas):
    """
    Canvas that defers every page until save() so the footer can print
    the total page count.
    """

    def __init__(self, *args: Any, footer: "_Footer", **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._footer = footer
        self._saved_page_states: list[dict] = []

    def showPage(self) -> None:
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self) -> None:
        total = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self._draw_footer(total)
            super().showPage()
        super().save()

    def _draw_footer(self, total: int) -> None:
        footer = self._footer
        y = 10 * mm
        self.saveState()
        self.setFont(footer.font, 8)
        self.setFillColor(COLORS["secondary"])
        self.drawCentredString(PAGE_WIDTH / 2, y, f"Sayfa {self._pageNumber} / {total}")
        self.drawString(MARGIN, y, footer.product_name)
        self.drawRightString(PAGE_WIDTH - MARGIN, y, footer.date_text)
        self.restoreState()


@dataclass(frozen=True)
class _Footer:
    font: str
    product_name: str
    date_text: str


class _Document:
    """Story builder shared by every report flavor."""

    def __init__(self, title: str, subtitle: Optional[str] = None, now: Optional[datetime] = None):
        self.now = now or datetime.now()
        font, bold = register_fonts()
        self.styles = _Styles(font, bold)
        self.title = title
        self.story: list[Flowable] = []
        self._header(title, subtitle)

    # -- building blocks ------------------------------------------------------

    def _header(self, title: str, subtitle: Optional[str]) -> None:
        s = self.styles
        left = [Paragraph(_text(title), s.style(20, COLORS["primary"], bold=True, leading=24))]
        if subtitle:
            left.append(Paragraph(_text(subtitle), s.style(10, COLORS["secondary"])))
        right = [
            Paragraph(
                _text(f"Rapor: {generate_report_id(self.now)}"),
                s.style(8, COLORS["secondary"], align=TA_RIGHT),
            ),
            Paragraph(
                _text(format_datetime(self.now)),
                s.style(8, COLORS["secondary"], align=TA_RIGHT),
            ),
        ]
        table = Table([[left, right]], colWidths=[CONTENT_WIDTH * 0.7, CONTENT_WIDTH * 0.3])
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, -1), COLORS["light"]),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                    ("TOPPADDING", (0, 0), (-1, -1), 8),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
                    ("LINEBELOW", (0, 0), (-1, -1), 1.5, COLORS["primary"]),
                ]
            )
        )
        self.story.append(table)
        self.space(8)

    def space(self, height_mm: float) -> None:
        self.story.append(Spacer(1, height_mm * mm))

    def page_break_if_less_than(self, height: float) -> None:
        self.story.append(CondPageBreak(height))

    def paragraph(self, text: str, style: ParagraphStyle) -> None:
        self.story.append(Paragraph(text, style))

    def _bar(self, title: str, background: colors.Color, text_color: colors.Color, size: float) -> None:
        table = Table(
            [[Paragraph(_text(title), self.styles.style(size, text_color, bold=True))]],
            colWidths=[CONTENT_WIDTH],
        )
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, -1), background),
                    ("LEFTPADDING", (0, 0), (-1, -1), 4 * mm),
                    ("TOPPADDING", (0, 0), (-1, -1), 4),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        self.story.append(table)
        self.space(3)

    def section(self, title: str) -> None:
        self._bar(title, COLORS["primary"], colors.white, 11)

    def subsection(self, title: str) -> None:
        self._bar(title, COLORS["light"], COLORS["dark"], 10)

    def info_table(self, rows: list[tuple[str, str]], label_width: float = 40 * mm, value_align: int = 0) -> None:
        """Borderless label/value table."""
        s = self.styles
        label_style = s.style(9, bold=True)
        value_style = s.style(9, align=value_align)
        data = [[Paragraph(_text(label), label_style), Paragraph(_text(value), value_style)] for label, value in rows]
        table = Table(data, colWidths=[label_width, CONTENT_WIDTH - label_width])
        table.setStyle(
            TableStyle(
                [
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("TOPPADDING", (0, 0), (-1, -1), 2),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 2),
                ]
            )
        )
        self.story.append(table)

    def data_table(
        self,
        header: list[str],
        rows: list[list[str]],
        widths: list[Optional[float]],
        header_color: colors.Color,
        *,
        size: float = 8,
        right_columns: tuple[int, ...] = (),
        center_columns: tuple[int, ...] = (),
    ) -> None:
        """
        Striped table with a repeated header row.
        A None width takes whatever the fixed columns leave.
        """
        fixed = sum(w for w in widths if w is not None)
        flexible = CONTENT_WIDTH - fixed
        col_widths = [w if w is not None else flexible for w in widths]

        s = self.styles
        cell_style = s.style(size)
        head_style = s.style(size, colors.white, bold=True)

        def cells(values: list[str], style: ParagraphStyle, row_align: dict[int, int]) -> list[Paragraph]:
            out = []
            for index, value in enumerate(values):
                align = row_align.get(index, 0)
                cell = style if align == 0 else ParagraphStyle(f"{style.name}a{align}", parent=style, alignment=align)
                out.append(Paragraph(_text(value), cell))
            return out

        alignment = {i: TA_RIGHT for i in right_columns}
        alignment.update({i: TA_CENTER for i in center_columns})

        data = [cells(header, head_style, alignment)]
        data.extend(cells(row, cell_style, alignment) for row in rows)

        table = Table(data, colWidths=col_widths, repeatRows=1)
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), header_color),
                    ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, COLORS["light"]]),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                    ("TOPPADDING", (0, 0), (-1, -1), 2),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 2),
                ]
            )
        )
        self.story.append(table)

    # -- recipe block ---------------------------------------------------------

    def recipe_block(self, recipe: ExportRecipe, category_name: Optional[str] = None) -> None:
        """Title bar, ingredient table, cost line, allergens, instructions, critical details."""
        s = self.styles
        cost = recipe.cost
        self.page_break_if_less_than(RECIPE_BREAK)

        meta = META_SEPARATOR.join(
            [
                category_name or UNCATEGORIZED_LABEL,
                difficulty_label(recipe.difficulty),
                f"{recipe.prep_time} dk" if recipe.prep_time else EMPTY_LABEL,
                recipe.yield_label,
            ]
        )
        title_bar = Table(
            [
                [
                    Paragraph(_text(f"{recipe.recipe_no} - {recipe.name}"), s.style(11, bold=True)),
                    Paragraph(_text(meta), s.style(8, COLORS["secondary"], align=TA_RIGHT)),
                ]
            ],
            colWidths=[CONTENT_WIDTH * 0.55, CONTENT_WIDTH * 0.45],
        )
        title_bar.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, -1), COLORS["light"]),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                    ("TOPPADDING", (0, 0), (-1, -1), 5),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
                ]
            )
        )
        self.story.append(title_bar)
        self.space(3)

        if recipe.lines:
            self.paragraph("Malzemeler:", s.style(9, bold=True))
            self.space(1)
            self.data_table(
                ["Malzeme", "Miktar", "Birim", "Hazirlik", "Maliyet"],
                [
                    [
                        line.ingredient_name,
                        format_number(line.quantity, 2),
                        line.unit,
                        line.prep_detail or EMPTY_LABEL,
                        format_currency(line.line_cost),
                    ]
                    for line in recipe.lines
                ],
                [None, 18 * mm, 15 * mm, 30 * mm, 25 * mm],
                COLORS["secondary"],
                right_columns=(4,),
                center_columns=(1, 2),
            )
            self.space(2)
            cost_line = " | ".join(
                [
                    f"Malzeme: {format_currency(cost.ingredients_cost)}",
                    f"Fire ({recipe.waste_label}): {format_currency(cost.waste_cost)}",
                    f"Toplam: {format_currency(cost.total_cost)}",
                    f"Satis: {format_currency(recipe.sale_price)}",
                    f"Kar Marji: {format_percentage(cost.profit_margin)}",
                ]
            )
            self.paragraph(_text(cost_line), s.style(8))
            self.space(2)

        allergens = recipe.active_allergens
        if allergens:
            self.paragraph(_text("Alerjenler: " + ", ".join(allergens)), s.style(8, COLORS["danger"]))
            self.space(2)

        if recipe.instructions:
            self.page_break_if_less_than(INSTRUCTIONS_BREAK)
            self.paragraph("Hazirlanis:", s.style(8, bold=True))
            self.paragraph(_text(recipe.instructions), s.style(8))
            self.space(2)

        if recipe.critical_details:
            self.page_break_if_less_than(CRITICAL_BREAK)
            self.paragraph("Kritik Detaylar:", s.style(8, COLORS["warning"], bold=True))
            self.paragraph(_text(recipe.critical_details), s.style(8))

        self.space(8)

    def category_sections(self, report: OutletReport) -> None:
        """Every non-empty category, then the uncategorized recipes."""
        for category, recipes in report.grouped():
            self.page_break_if_less_than(CATEGORY_BREAK)
            self.section(f"{category.name} ({len(recipes)} tarif)")
            for recipe in recipes:
                self.recipe_block(recipe, category.name)
            self.space(5)

        uncategorized = report.uncategorized
        if uncategorized:
            self.page_break_if_less_than(CATEGORY_BREAK)
            self.section(f"{UNCATEGORIZED_LABEL} ({len(uncategorized)} tarif)")
            for recipe in uncategorized:
                self.recipe_block(recipe)

    # -- output ---------------------------------------------------------------

    def render(self) -> bytes:
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=MARGIN,
            rightMargin=MARGIN,
            topMargin=MARGIN,
            bottomMargin=20 * mm,
            title=self.title,
            author=settings.product_name,
        )
        footer = _Footer(
            font=self.styles.font,
            product_name=settings.product_name,
            date_text=format_date(self.now),
        )
        doc.build(self.story, canvasmaker=partial(NumberedCanvas, footer=footer))
        return buffer.getvalue()


def _pdf(content: bytes, filename: str) -> ExportFile:
    return ExportFile(content=content, filename=filename, media_type=PDF_MEDIA_TYPE)


# =============================================================================
# Reports
# =============================================================================


def build_outlet_pdf(report: OutletReport, now: Optional[datetime] = None) -> ExportFile:
    """Outlet report: general info, statistics, recipes by category."""
    outlet = report.outlet
    doc = _Document(outlet.name, "Restoran Raporu", now)

    doc.section("Genel Bilgiler")
    doc.info_table(
        [
            ("Restoran Adi", outlet.name),
            ("Tur", outlet.type or EMPTY_LABEL),
            ("Konum", outlet.location or EMPTY_LABEL),
            ("Durum", outlet_status_label(outlet.status)),
            ("Olusturulma", format_date(outlet.created_at)),
        ]
    )
    doc.space(6)

    doc.section("Istatistikler")
    doc.info_table(
        [
            ("Toplam Tarif", str(len(report.recipes))),
            ("Kategori Sayisi", str(len(report.categories))),
            ("Toplam Maliyet", format_currency(report.total_cost)),
            ("Toplam Satis", format_currency(report.total_sale)),
            ("Toplam Kar", format_currency(report.total_sale - report.total_cost)),
        ]
    )
    doc.space(10)

    doc.category_sections(report)

    filename = f"{sanitize_filename(outlet.name)}_Rapor_{filename_date(doc.now)}.pdf"
    return _pdf(doc.render(), filename)


def build_menu_pdf(report: OutletReport, now: Optional[datetime] = None) -> ExportFile:
    """Menu: recipes by category, without the statistics block."""
    outlet = report.outlet
    doc = _Document(f"{outlet.name} - Menu", "Detayli Tarif Listesi", now)
    doc.category_sections(report)

    filename = f"{sanitize_filename(outlet.name)}_Menu_{filename_date(doc.now)}.pdf"
    return _pdf(doc.render(), filename)


def build_recipe_pdf(report: RecipeReport, now: Optional[datetime] = None) -> ExportFile:
    """Single recipe with full cost analysis."""
    recipe = report.recipe
    cost = recipe.cost
    doc = _Document(recipe.name, f"Tarif No: {recipe.recipe_no}", now)
    s = doc.styles

    doc.section("Tarif Bilgileri")
    doc.info_table(
        [
            ("Tarif No", recipe.recipe_no),
            ("Tarif Adi", recipe.name),
            ("Restoran", report.outlet_label),
            ("Kategori", report.category_label),
            ("Zorluk", difficulty_label(recipe.difficulty)),
            ("Hazirlik Suresi", f"{recipe.prep_time} dakika" if recipe.prep_time else EMPTY_LABEL),
            ("Porsiyon", recipe.yield_label),
            ("Fire Orani", format_percentage(cost.waste_percentage)),
            ("Durum", recipe_status_label(recipe.status)),
        ]
    )
    doc.space(6)

    if recipe.lines:
        doc.section("Malzemeler")
        doc.data_table(
            ["Malzeme", "Miktar", "Birim", "Hazirlik", "Birim Fiyat", "Toplam"],
            [
                [
                    line.ingredient_name,
                    format_number(line.quantity, 2),
                    line.unit,
                    line.prep_detail or EMPTY_LABEL,
                    format_currency(line.cost_per_unit),
                    format_currency(line.line_cost),
                ]
                for line in recipe.lines
            ],
            [None, 18 * mm, 16 * mm, 35 * mm, 27 * mm, 27 * mm],
            COLORS["primary"],
            size=9,
            right_columns=(4, 5),
        )
        doc.space(6)

        doc.subsection("Maliyet Analizi")
        doc.info_table(
            [
                ("Malzeme Maliyeti", format_currency(cost.ingredients_cost)),
                (f"Fire Maliyeti ({recipe.waste_label})", format_currency(cost.waste_cost)),
                ("Toplam Maliyet", format_currency(cost.total_cost)),
                ("Satis Fiyati", format_currency(recipe.sale_price)),
                ("Kar", format_currency(cost.profit)),
                ("Kar Marji", format_percentage(cost.profit_margin)),
            ],
            label_width=50 * mm,
            value_align=TA_RIGHT,
        )
        doc.space(6)

    allergens = recipe.active_allergens
    if allergens:
        doc.page_break_if_less_than(RECIPE_SECTION_BREAK)
        doc.subsection("Alerjenler")
        doc.paragraph(_text(", ".join(allergens)), s.style(10, COLORS["danger"]))
        doc.space(6)

    if recipe.instructions:
        doc.page_break_if_less_than(RECIPE_INSTRUCTIONS_BREAK)
        doc.section("Hazirlanis")
        doc.paragraph(_text(recipe.instructions), s.style(9))
        doc.space(6)

    if recipe.critical_details:
        doc.page_break_if_less_than(RECIPE_SECTION_BREAK)
        doc.subsection("Kritik Detaylar")
        doc.paragraph(_text(recipe.critical_details), s.style(9))

    filename = f"{sanitize_filename(recipe.recipe_no)}_{sanitize_filename(recipe.name)}.pdf"
    return _pdf(doc.render(), filename)


def build_ingredients_pdf(
    ingredients: list[ExportIngredient],
    now: Optional[datetime] = None,
) -> ExportFile:
    """Ingredient library grouped by ingredient category."""
    doc = _Document("Malzeme Kutuphanesi", f"{len(ingredients)} malzeme", now)

    for category, members in group_ingredients(ingredients):
        doc.page_break_if_less_than(INGREDIENT_CATEGORY_BREAK)
        doc.section(f"{category} ({len(members)} malzeme)")
        doc.data_table(
            ["No", "Malzeme Adi", "Birim", "Birim Fiyat", "Tedarikci"],
            [
                [
                    ingredient.ingredient_no or EMPTY_LABEL,
                    ingredient.name,
                    ingredient.base_unit,
                    format_currency(ingredient.cost_per_unit),
                    ingredient.supplier or EMPTY_LABEL,
                ]
                for ingredient in members
            ],
            [20 * mm, None, 18 * mm, 28 * mm, 35 * mm],
            COLORS["secondary"],
            size=9,
            right_columns=(3,),
        )
        doc.space(6)

    filename = f"Malzeme_Kutuphanesi_{filename_date(doc.now)}.pdf"
    return _pdf(doc.render(), filename)
