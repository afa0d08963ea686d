"""
Export entry points: load the data, pick the generator for the format.

Loader lookups raise NotFoundError (404) as usual. Any failure while
rendering is logged with its cause and surfaced as ExportError with the
generic Turkish message; no partial file is ever returned.
"""

from datetime import datetime
from enum import Enum
from functools import partial
from typing import Callable, Optional

from sqlalchemy.orm import Session

from shared.config.logging import export_logger as logger
from shared.utils.exceptions import ExportError

from . import excel, pdf
from .data import ExportFile
from .loader import load_ingredients, load_outlet_report, load_recipe_report


class ExportFormat(str, Enum):
    PDF = "pdf"
    XLSX = "xlsx"


def _render(report: str, build: Callable[[], ExportFile], **log_context) -> ExportFile:
    try:
        export = build()
    except Exception as exc:
        logger.error(
            "Export generation failed",
            report=report,
            error=str(exc),
            exc_info=True,
            **log_context,
        )
        raise ExportError(report, **log_context) from exc

    logger.info(
        "Export generated",
        report=report,
        filename=export.filename,
        size_bytes=len(export.content),
        **log_context,
    )
    return export


def export_outlet(
    db: Session,
    outlet_id: int,
    fmt: ExportFormat,
    now: Optional[datetime] = None,
) -> ExportFile:
    """Full outlet report."""
    report = load_outlet_report(db, outlet_id)
    builder = pdf.build_outlet_pdf if fmt == ExportFormat.PDF else excel.build_outlet_workbook
    return _render("outlet", partial(builder, report, now), outlet_id=outlet_id, format=fmt.value)


def export_menu(
    db: Session,
    outlet_id: int,
    fmt: ExportFormat,
    now: Optional[datetime] = None,
) -> ExportFile:
    """Menu of an outlet, grouped by category."""
    report = load_outlet_report(db, outlet_id)
    builder = pdf.build_menu_pdf if fmt == ExportFormat.PDF else excel.build_menu_workbook
    return _render("menu", partial(builder, report, now), outlet_id=outlet_id, format=fmt.value)


def export_recipe(db: Session, recipe_id: int, fmt: ExportFormat) -> ExportFile:
    """Single recipe with its cost analysis."""
    report = load_recipe_report(db, recipe_id)
    builder = pdf.build_recipe_pdf if fmt == ExportFormat.PDF else excel.build_recipe_workbook
    return _render("recipe", partial(builder, report), recipe_id=recipe_id, format=fmt.value)


def export_ingredients(
    db: Session,
    fmt: ExportFormat,
    now: Optional[datetime] = None,
) -> ExportFile:
    """The whole ingredient library."""
    ingredients = load_ingredients(db)
    builder = pdf.build_ingredients_pdf if fmt == ExportFormat.PDF else excel.build_ingredients_workbook
    return _render("ingredients", partial(builder, ingredients, now), format=fmt.value)
