"""
Report exports (PDF and XLSX).

- formatting: tr-TR number, currency, date and filename helpers
- data: plain records the generators consume
- loader: database -> export records
- excel / pdf: the generators
- service: format dispatch and failure handling

Usage:
    from kitchen_api.services.exports import ExportFormat, export_outlet

    export = export_outlet(db, outlet_id, ExportFormat.XLSX)
    export.filename  # "Kadıköy_Şube_Rapor_19_Ekim_2026.xlsx"
"""

from .data import ExportFile
from .service import (
    ExportFormat,
    export_outlet,
    export_menu,
    export_recipe,
    export_ingredients,
)

__all__ = [
    "ExportFile",
    "ExportFormat",
    "export_outlet",
    "export_menu",
    "export_recipe",
    "export_ingredients",
]
