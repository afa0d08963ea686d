"""
Repository base: reads with eager loading and default ordering, staged writes.

Repositories never commit. Services own the transaction and finish it with
safe_commit(), so a recipe header and its lines are saved or rolled back together.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TypeVar, Generic, Sequence
from sqlalchemy.orm import Session
from sqlalchemy import ColumnElement, Select, select, func, or_

from shared.utils.validators import escape_like_pattern, sanitize_search_term


ModelT = TypeVar("ModelT")


@dataclass
class RepositoryFilters:
    """Base filters for repository queries."""

    # Search (case-insensitive substring)
    search: str | None = None

    # Optional cap on result size (None returns everything)
    limit: int | None = None

    def __post_init__(self):
        """Validate and normalize filters."""
        self.search = sanitize_search_term(self.search) or None
        if self.limit is not None:
            self.limit = max(1, self.limit)


def search_condition(search: str, *columns) -> ColumnElement[bool]:
    """OR of case-insensitive LIKE matches of the term over the given columns."""
    pattern = f"%{escape_like_pattern(search)}%"
    return or_(*(column.ilike(pattern, escape="\\") for column in columns))


class BaseRepository(ABC, Generic[ModelT]):
    """
    Subclasses provide ``model`` and ``_base_query()`` (eager loading plus the
    listing order) and may narrow listings in ``_apply_filters()``.
    """

    def __init__(self, db: Session):
        self._db = db

    @property
    @abstractmethod
    def model(self) -> type[ModelT]:
        ...

    @abstractmethod
    def _base_query(self) -> Select:
        ...

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        return query

    def find_all(self, filters: RepositoryFilters | None = None) -> Sequence[ModelT]:
        """
        Find all entities matching filters, in the repository's default order.
        """
        filters = filters or RepositoryFilters()
        query = self._apply_filters(self._base_query(), filters)

        if filters.limit is not None:
            query = query.limit(filters.limit)

        return self._db.execute(query).scalars().unique().all()

    def find_by_id(self, entity_id: int) -> ModelT | None:
        """Find entity by ID, with the same eager loading as find_all."""
        query = self._base_query().where(self.model.id == entity_id)
        return self._db.scalar(query)

    def count(self) -> int:
        """Count all entities."""
        query = select(func.count()).select_from(self.model)
        return self._db.scalar(query) or 0

    def exists(self, entity_id: int) -> bool:
        """Check if entity exists."""
        query = (
            select(func.count())
            .select_from(self.model)
            .where(self.model.id == entity_id)
        )
        return (self._db.scalar(query) or 0) > 0

    def add(self, entity: ModelT) -> ModelT:
        """
        Stage entity and flush so generated IDs are available.
        The caller owns the transaction (see safe_commit).
        """
        self._db.add(entity)
        self._db.flush()
        return entity

    def delete(self, entity: ModelT) -> None:
        """Hard delete entity (ORM cascades apply)."""
        self._db.delete(entity)
        self._db.flush()
