"""
Presentation formatting shared by the PDF and XLSX report generators.

Numbers and dates are rendered by Babel in the tr_TR locale ("." thousands,
"," decimals, Turkish month names), e.g. ``format_currency(1234.5) == "1.234,50 TL"``
and ``format_date(date(2026, 10, 19)) == "19 Ekim 2026"``.
"""

import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional

from babel.dates import format_date as babel_format_date
from babel.dates import format_datetime as babel_format_datetime
from babel.numbers import format_decimal

from shared.config.constants import ALLERGEN_KEYS, EMPTY_LABEL, Limits, allergen_label

CURRENCY_SUFFIX = "TL"

REPORT_LOCALE = "tr_TR"

_ILLEGAL_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*]')
_WHITESPACE_RUN = re.compile(r"\s+")
_UNDERSCORE_RUN = re.compile(r"_{2,}")


# =============================================================================
# Numbers
# =============================================================================


def format_number(value: float, decimals: int = 2) -> str:
    """Fixed-decimal number with Turkish separators: 1234.5 -> '1.234,50'.

    Halves round away from zero before Babel sees the value (Babel rounds
    half-to-even).
    """
    quantum = Decimal(1).scaleb(-decimals)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    pattern = "#,##0." + "0" * decimals if decimals > 0 else "#,##0"
    return format_decimal(rounded, format=pattern, locale=REPORT_LOCALE)


def format_currency(value: Optional[float]) -> str:
    """Two-decimal amount with the TL suffix; None renders as '-'."""
    if value is None:
        return EMPTY_LABEL
    return f"{format_number(value, 2)} {CURRENCY_SUFFIX}"


def format_percentage(value: float) -> str:
    """Percent sign first, one decimal: 30 -> '%30,0'."""
    return f"%{format_number(value, 1)}"


def format_quantity(value: Optional[float]) -> str:
    """Quantity without trailing zeros: 2.0 -> '2', 0.25 -> '0,25'."""
    if value is None:
        return EMPTY_LABEL
    return format_decimal(Decimal(str(value)), format="0.##########", locale=REPORT_LOCALE)


# =============================================================================
# Dates
# =============================================================================


def _as_datetime(value: date | datetime | str) -> datetime:
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def format_date(value: date | datetime | str | None) -> str:
    """Long Turkish date: '19 Ekim 2026'."""
    if value is None:
        return EMPTY_LABEL
    return babel_format_date(_as_datetime(value), format="long", locale=REPORT_LOCALE)


def format_datetime(value: date | datetime | str | None) -> str:
    """Long Turkish date with hour and minute: '19 Ekim 2026 14:05'."""
    if value is None:
        return EMPTY_LABEL
    return babel_format_datetime(_as_datetime(value), "d MMMM y HH:mm", locale=REPORT_LOCALE)


def filename_date(value: date | datetime | None = None) -> str:
    """Date part of export filenames: '19_Ekim_2026'."""
    return format_date(value or datetime.now()).replace(" ", "_")


# =============================================================================
# Identifiers
# =============================================================================


def sanitize_filename(name: str) -> str:
    """
    Make a string safe to use as a download filename.

    Strips <>:"/\\|?*, turns whitespace runs into one underscore, collapses
    repeated underscores and truncates to 100 characters. Idempotent.
    """
    cleaned = _ILLEGAL_FILENAME_CHARS.sub("", name)
    cleaned = _WHITESPACE_RUN.sub("_", cleaned)
    cleaned = _UNDERSCORE_RUN.sub("_", cleaned)
    return cleaned[: Limits.MAX_FILENAME_LENGTH]


def generate_report_id(now: Optional[datetime] = None) -> str:
    """
    Cosmetic report identifier 'RPT-YYYYMMDD-HHMM'.
    Not unique: two reports generated in the same minute share it.
    """
    now = now or datetime.now()
    return f"RPT-{now:%Y%m%d}-{now:%H%M}"


# =============================================================================
# Allergens
# =============================================================================


def get_active_allergens(allergens: Optional[Mapping[str, bool]]) -> list[str]:
    """Labels of the allergens flagged True, in the fixed allergen order."""
    if not allergens:
        return []
    return [allergen_label(key) for key in ALLERGEN_KEYS if allergens.get(key)]
