"""
Outlet Models: Outlet, Category.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import OutletStatus
from .base import Base, IdType, TimestampMixin

if TYPE_CHECKING:
    from .recipe import Recipe


class Outlet(TimestampMixin, Base):
    """
    Restaurant location. Owns its menu categories and recipes;
    deleting an outlet removes both.
    """

    __tablename__ = "outlet"

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    type: Mapped[Optional[str]] = mapped_column(String(100))  # Restoran, Kafe, Bar ...
    location: Mapped[Optional[str]] = mapped_column(Text)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=OutletStatus.ACTIVE.value
    )

    categories: Mapped[list["Category"]] = relationship(
        back_populates="outlet",
        cascade="all, delete-orphan",
        order_by="Category.sort_order",
    )
    recipes: Mapped[list["Recipe"]] = relationship(
        back_populates="outlet",
        cascade="all, delete-orphan",
    )


class Category(TimestampMixin, Base):
    """
    Named grouping of recipes within an outlet's menu.

    Recipes are not owned by their category: removing a category leaves
    its recipes uncategorized (see CategoryService.delete).
    """

    __tablename__ = "category"

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    outlet_id: Mapped[int] = mapped_column(
        IdType, ForeignKey("outlet.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    outlet: Mapped["Outlet"] = relationship(back_populates="categories")

    __table_args__ = (
        UniqueConstraint("outlet_id", "name", name="uq_category_outlet_name"),
    )
