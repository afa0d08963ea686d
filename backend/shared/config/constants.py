"""
Centralized constants for the backend application.
Avoids magic strings and repeated constants.

The vocabulary enums carry their Turkish display labels. The label helpers
are total over the enum: an unknown raw value raises ValueError instead of
rendering a placeholder.

Usage:
    from shared.config.constants import Allergen, allergen_label, RecipeStatus

    if recipe.status == RecipeStatus.ACTIVE:
        ...

    allergen_label("gluten")  # "Gluten"
"""

from enum import Enum
from typing import Final


EMPTY_LABEL: Final[str] = "-"


# =============================================================================
# Allergens
# =============================================================================


class Allergen(str, Enum):
    """The fixed 15-flag allergen matrix attached to every recipe (ordered)."""

    GLUTEN = "gluten"
    LACTOSE = "lactose"
    YEAST = "yeast"
    EGG = "egg"
    FISH = "fish"
    MILK = "milk"
    PEANUT = "peanut"
    SHELLFISH = "shellfish"
    SOYA = "soya"
    NUTS = "nuts"
    WHEAT = "wheat"
    CELERY = "celery"
    MUSTARD = "mustard"
    SESAME = "sesame"
    SULPHITES = "sulphites"


ALLERGEN_LABELS: Final[dict[Allergen, str]] = {
    Allergen.GLUTEN: "Gluten",
    Allergen.LACTOSE: "Laktoz",
    Allergen.YEAST: "Maya",
    Allergen.EGG: "Yumurta",
    Allergen.FISH: "Balık",
    Allergen.MILK: "Süt",
    Allergen.PEANUT: "Yer Fıstığı",
    Allergen.SHELLFISH: "Kabuklu Deniz Ürünleri",
    Allergen.SOYA: "Soya",
    Allergen.NUTS: "Kuruyemiş",
    Allergen.WHEAT: "Buğday",
    Allergen.CELERY: "Kereviz",
    Allergen.MUSTARD: "Hardal",
    Allergen.SESAME: "Susam",
    Allergen.SULPHITES: "Sülfitler",
}

ALLERGEN_KEYS: Final[tuple[str, ...]] = tuple(a.value for a in Allergen)


def empty_allergens() -> dict[str, bool]:
    """All 15 allergen flags set to False, in schema order."""
    return {key: False for key in ALLERGEN_KEYS}


# =============================================================================
# Entity Status Constants
# =============================================================================


class OutletStatus(str, Enum):
    """Outlet (restaurant location) status."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    MAINTENANCE = "maintenance"
    CLOSED = "closed"


class RecipeStatus(str, Enum):
    """Recipe lifecycle status."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    ARCHIVED = "archived"


class Difficulty(str, Enum):
    """Recipe preparation difficulty."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


OUTLET_STATUS_LABELS: Final[dict[OutletStatus, str]] = {
    OutletStatus.ACTIVE: "Aktif",
    OutletStatus.INACTIVE: "Pasif",
    OutletStatus.MAINTENANCE: "Bakımda",
    OutletStatus.CLOSED: "Kapalı",
}

RECIPE_STATUS_LABELS: Final[dict[RecipeStatus, str]] = {
    RecipeStatus.ACTIVE: "Aktif",
    RecipeStatus.INACTIVE: "Pasif",
    RecipeStatus.ARCHIVED: "Arşivlenmiş",
}

DIFFICULTY_LABELS: Final[dict[Difficulty, str]] = {
    Difficulty.EASY: "Kolay",
    Difficulty.MEDIUM: "Orta",
    Difficulty.HARD: "Zor",
}


# =============================================================================
# Label Functions
# =============================================================================


def allergen_label(value: Allergen | str) -> str:
    """Display label for an allergen key. Raises ValueError for unknown keys."""
    return ALLERGEN_LABELS[Allergen(value)]


def outlet_status_label(value: OutletStatus | str | None) -> str:
    """Display label for an outlet status; None renders as '-'."""
    if value is None:
        return EMPTY_LABEL
    return OUTLET_STATUS_LABELS[OutletStatus(value)]


def recipe_status_label(value: RecipeStatus | str | None) -> str:
    """Display label for a recipe status; None renders as '-'."""
    if value is None:
        return EMPTY_LABEL
    return RECIPE_STATUS_LABELS[RecipeStatus(value)]


def difficulty_label(value: Difficulty | str | None) -> str:
    """Display label for a difficulty level; None renders as '-'."""
    if value is None:
        return EMPTY_LABEL
    return DIFFICULTY_LABELS[Difficulty(value)]


# =============================================================================
# Recipe Numbering
# =============================================================================


class RecipeNumbering:
    """Human-readable recipe number format: RCP-<year>-<seq3>."""

    PREFIX: Final[str] = "RCP"
    SEQUENCE_WIDTH: Final[int] = 3


# =============================================================================
# Validation Constants
# =============================================================================


class Limits:
    """Validation limits."""

    # Recipe numeric bounds
    MIN_LINE_QUANTITY: Final[float] = 0.0001
    MIN_YIELD_AMOUNT: Final[float] = 1
    MIN_WASTE_PERCENTAGE: Final[float] = 0
    MAX_WASTE_PERCENTAGE: Final[float] = 100
    DEFAULT_WASTE_PERCENTAGE: Final[float] = 5

    # String lengths
    MIN_NAME_LENGTH: Final[int] = 2
    MAX_NAME_LENGTH: Final[int] = 200
    MAX_SHORT_TEXT_LENGTH: Final[int] = 100
    MAX_TEXT_LENGTH: Final[int] = 10_000
    MAX_URL_LENGTH: Final[int] = 2048
    MAX_SEARCH_TERM_LENGTH: Final[int] = 100

    # Export naming
    MAX_FILENAME_LENGTH: Final[int] = 100
    SHEET_NAME_TRUNCATE: Final[int] = 28
    MAX_SHEET_NAME_LENGTH: Final[int] = 31


# Unit of measure used when an ingredient is auto-created without one
DEFAULT_BASE_UNIT: Final[str] = "kg"

# Units seeded into the advisory vocabulary on first startup
DEFAULT_UNITS: Final[list[tuple[str, str]]] = [
    ("Kilogram", "kg"),
    ("Gram", "g"),
    ("Litre", "lt"),
    ("Mililitre", "ml"),
    ("Adet", "adet"),
    ("Porsiyon", "porsiyon"),
    ("Paket", "pkt"),
    ("Demet", "demet"),
    ("Yemek Kaşığı", "yk"),
    ("Çay Kaşığı", "çk"),
]


# =============================================================================
# Error Messages (Turkish)
# =============================================================================


class ErrorMessages:
    """Standardized user-facing messages."""

    EXPORT_FAILED: Final[str] = "Dışa aktarma sırasında bir hata oluştu"
    INVALID_INPUT: Final[str] = "Geçersiz giriş"
    CATEGORY_OUTLET_MISMATCH: Final[str] = "Kategori bu restorana ait değil"
    INGREDIENT_IN_USE: Final[str] = "Malzeme {count} tarifte kullanılıyor, silinemez"
    UNKNOWN_INGREDIENT: Final[str] = "Satır {row}: malzeme bulunamadı (ID: {ingredient_id})"
    CONCURRENT_CHANGE: Final[str] = "Kayıt başka bir işlemle değişti, lütfen tekrar deneyin"
