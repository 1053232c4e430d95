"""Generic repository base and query utilities for SQLAlchemy 2.x.

This module centralizes persistence-only concerns shared by all repositories:
- Session access (injected by the Unit of Work, Flask-scoped otherwise).
- Deterministic page slicing (callers supply an ``ORDER BY`` with a tiebreaker).
- No business logic, no commit/rollback. Services own transactions.

Design decisions
----------------
* Repositories MUST remain thin and persistence-focused:
  - They never implement use cases or domain policies.
  - They never call commit/rollback; Services define the Unit of Work.
* ``add`` flushes immediately so generated primary keys are readable inside
  the transaction.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from motomarket.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


def page_offset(page: int, limit: int) -> tuple[int, int]:
    """Return ``(limit, offset)`` for a 1-based page, clamping both to sane values.

    :param page: 1-based page number (clamped to ``>= 1``).
    :type page: int
    :param limit: Page size (clamped to ``>= 1``).
    :type limit: int
    :returns: Tuple ``(limit, offset)``.
    :rtype: tuple[int, int]
    """
    page = max(int(page), 1)
    limit = max(int(limit), 1)
    return limit, (page - 1) * limit


def paginate_select(session: Session, stmt: Select[Any], *, page: int, limit: int) -> list[Any]:
    """Execute an already-ordered select and return one page of scalars.

    :param session: Active SQLAlchemy session.
    :type session: :class:`sqlalchemy.orm.Session`
    :param stmt: Base select to paginate (already filtered/sorted).
    :type stmt: :class:`sqlalchemy.sql.Select`
    :param page: 1-based page number.
    :type page: int
    :param limit: Page size.
    :type limit: int
    :returns: Entities in the requested page (possibly empty).
    :rtype: list[Any]
    """
    limit, offset = page_offset(page, limit)
    sliced = stmt.limit(limit).offset(offset)
    return list(session.execute(sliced).scalars().all())


class BaseRepository(Generic[E]):
    """Generic, persistence-only repository for a single aggregate.

    Subclasses MUST define ``model``, the SQLAlchemy mapped class.

    This class NEVER:

    * opens/commits/rolls back transactions,
    * implements business rules or cross-aggregate coordination.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """Initialise the repository with an optional SQLAlchemy session.

        When no explicit session is provided the repository falls back to the
        Flask-scoped session exposed by ``motomarket.core.extensions``.
        """
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        """Return the injected session, or the Flask-scoped one."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    def _pk_attr(self) -> InstrumentedAttribute[Any]:
        pk_attr = getattr(self.model, "id", None)
        if pk_attr is None:
            raise RuntimeError(f"{self.model.__name__} has no 'id' attribute.")
        return pk_attr

    def add(self, instance: E) -> E:
        """Stage a new entity for persistence and flush to materialize the PK.

        :param instance: New entity instance.
        :type instance: E
        :returns: The same instance after ``flush()``.
        :rtype: E
        """
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        """Retrieve a single entity by primary key, or ``None``."""
        stmt = select(self.model).where(self._pk_attr() == entity_id)
        result = self.session.execute(stmt).scalars().first()
        return cast(E | None, result)

    def flush(self) -> None:
        """Flush pending changes to the database without committing."""
        self.session.flush()
