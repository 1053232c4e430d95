# motomarket/services/_shared/base.py
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import ClassVar

from motomarket.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

# Page size shared by every paginated listing.
PAGE_SIZE = 10


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work with a
      per-operation deadline.
    * Offer shared validation helpers (pagination, text trimming).
    * Keep services thin, orchestration-only, no web leakage.

    Notes
    -----
    - Services must never touch the global session; always use a Unit of Work.
    - Every mutating operation goes through :meth:`rw_uow`, which runs at
      ``SERIALIZABLE`` isolation.
    """

    # ---- Configuration defaults (override per subclass if needed) ----
    DEFAULT_READ_ISOLATION: ClassVar[str] = "READ COMMITTED"
    DEFAULT_READ_BUDGET: ClassVar[timedelta] = timedelta(seconds=5)

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self, *, name: str, budget: timedelta) -> SQLAlchemyUnitOfWork:
        """
        Create a serializable, deadline-bound read-write Unit of Work.

        :param name: Operation name used in logs and errors.
        :type name: str
        :param budget: Time allowed from begin to commit.
        :type budget: timedelta
        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork(name=name, budget=budget)

    def ro_uow(
        self,
        *,
        name: str,
        budget: timedelta | None = None,
        isolation: str | None = None,
    ) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a deadline-bound read-only Unit of Work.

        :param name: Operation name used in logs and errors.
        :type name: str
        :param budget: Time allowed for the reads (defaults to :attr:`DEFAULT_READ_BUDGET`).
        :type budget: timedelta | None
        :param isolation: Transaction isolation level hint.
        :type isolation: str | None
        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork(
            name=name,
            budget=budget or self.DEFAULT_READ_BUDGET,
            isolation_level=isolation or self.DEFAULT_READ_ISOLATION,
        )

    # ----------------------- Validation utilities ---------------------------

    @staticmethod
    def ensure_page(page: int | None) -> int:
        """
        Clamp a 1-based page number.

        :param page: Requested page; ``None`` or values below 1 become 1.
        :type page: int | None
        :returns: Page number ``>= 1``.
        :rtype: int
        """
        return max(1, int(page or 1))

    @staticmethod
    def clean(value: str | None) -> str:
        """Trim surrounding whitespace; ``None`` becomes ``""``."""
        return (value or "").strip()

    @classmethod
    def clean_optional(cls, value: str | None) -> str | None:
        """Trim surrounding whitespace; empty results become ``None``."""
        return cls.clean(value) or None

    @staticmethod
    def now_utc() -> datetime:
        return datetime.now(UTC)
