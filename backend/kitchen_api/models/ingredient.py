"""
Ingredient Models: Ingredient (global price library), Unit (advisory vocabulary).
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import CheckConstraint, Float, String
from sqlalchemy.orm import Mapped, mapped_column, validates

from .base import Base, IdType, TimestampMixin


def ingredient_name_key(name: str) -> str:
    """Lookup key for ingredient names: whitespace collapsed, Unicode casefolded.

    Dotted capital I folds to a plain i so "ÇERİ" and "çeri" share a key.
    """
    return " ".join(name.split()).replace("İ", "I").casefold()


class Ingredient(TimestampMixin, Base):
    """
    Raw material shared by every outlet.
    cost_per_unit is the price of one base_unit in TL.
    """

    __tablename__ = "ingredient"

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    # Casefolded name for lookups, set by _sync_name_key
    name_key: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    ingredient_no: Mapped[Optional[str]] = mapped_column(String(50))
    category: Mapped[Optional[str]] = mapped_column(String(100))
    supplier: Mapped[Optional[str]] = mapped_column(String(200))
    base_unit: Mapped[str] = mapped_column(String(50), nullable=False)
    cost_per_unit: Mapped[float] = mapped_column(Float, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("cost_per_unit >= 0", name="chk_ingredient_cost_non_negative"),
    )

    @validates("name")
    def _sync_name_key(self, _key: str, name: str) -> str:
        self.name_key = ingredient_name_key(name)
        return name


class Unit(TimestampMixin, Base):
    """
    Measurement unit vocabulary. Recipe and ingredient unit fields are free
    text, so this table only feeds pickers.
    """

    __tablename__ = "unit"

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    abbreviation: Mapped[str] = mapped_column(String(20), nullable=False)
