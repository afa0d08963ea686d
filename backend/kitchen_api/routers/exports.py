"""
Report download endpoints (PDF and XLSX).

Generation is CPU heavy and runs inside the request, so every endpoint
is rate limited per client IP. A failed generation answers 500 with the
generic Turkish message and never a partial file.
"""

import unicodedata
from urllib.parse import quote

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.orm import Session

from shared.config.settings import settings
from shared.infrastructure.db import get_db
from shared.rate_limit import limiter
from kitchen_api.services.exports import (
    ExportFile,
    ExportFormat,
    export_ingredients,
    export_menu,
    export_outlet,
    export_recipe,
)


router = APIRouter(prefix="/exports", tags=["exports"])


def content_disposition(filename: str) -> str:
    """
    Attachment header with an ASCII fallback and an RFC 5987 UTF-8 name.

    "Kadıköy_Rapor.pdf" -> attachment; filename="Kadikoy_Rapor.pdf"; filename*=UTF-8''Kad%C4%B1k%C3%B6y_Rapor.pdf
    """
    ascii_name = (
        unicodedata.normalize("NFKD", filename.replace("ı", "i").replace("İ", "I"))
        .encode("ascii", "ignore")
        .decode("ascii")
        .replace('"', "")
    )
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"


def _file_response(export: ExportFile) -> Response:
    return Response(
        content=export.content,
        media_type=export.media_type,
        headers={"Content-Disposition": content_disposition(export.filename)},
    )


@router.get("/outlets/{outlet_id}")
@limiter.limit(settings.export_rate_limit)
def download_outlet_report(
    request: Request,
    outlet_id: int,
    format: ExportFormat = Query(ExportFormat.PDF),
    db: Session = Depends(get_db),
) -> Response:
    """Full outlet report: summary, every recipe and the ingredient rollup."""
    return _file_response(export_outlet(db, outlet_id, format))


@router.get("/outlets/{outlet_id}/menu")
@limiter.limit(settings.export_rate_limit)
def download_menu_report(
    request: Request,
    outlet_id: int,
    format: ExportFormat = Query(ExportFormat.PDF),
    db: Session = Depends(get_db),
) -> Response:
    """Menu of the outlet grouped by category."""
    return _file_response(export_menu(db, outlet_id, format))


@router.get("/recipes/{recipe_id}")
@limiter.limit(settings.export_rate_limit)
def download_recipe_report(
    request: Request,
    recipe_id: int,
    format: ExportFormat = Query(ExportFormat.PDF),
    db: Session = Depends(get_db),
) -> Response:
    """Single recipe card with its cost analysis."""
    return _file_response(export_recipe(db, recipe_id, format))


@router.get("/ingredients")
@limiter.limit(settings.export_rate_limit)
def download_ingredients_report(
    request: Request,
    format: ExportFormat = Query(ExportFormat.PDF),
    db: Session = Depends(get_db),
) -> Response:
    """The ingredient library grouped by category."""
    return _file_response(export_ingredients(db, format))
