"""
Per-transaction deadlines.

A :class:`Deadline` is created when a unit of work is entered and is checked
between the begin/execute/commit phases. It is also *armed* on the driver
connection so that a statement still running when the budget runs out is
interrupted by the database rather than left to finish:

* PostgreSQL: ``SET LOCAL statement_timeout`` (only when the unit owns the
  transaction, since ``SET LOCAL`` would otherwise leak into the outer scope).
* SQLite: a progress handler that aborts the running statement once expired.
"""

from __future__ import annotations

import logging
import time
from contextlib import suppress
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

from sqlalchemy.engine import Connection

from motomarket.services._shared.errors import TransactionTimeoutError

log = logging.getLogger(__name__)

# SQLite VM instructions between two deadline checks.
SQLITE_PROGRESS_STEPS = 1000


@dataclass(slots=True)
class Deadline:
    """Monotonic deadline bound to one unit of work."""

    budget: timedelta
    expires_at: float
    _driver_conn: Any = field(default=None, repr=False)

    @classmethod
    def after(cls, budget: timedelta) -> Deadline:
        return cls(budget=budget, expires_at=time.monotonic() + budget.total_seconds())

    def remaining(self) -> float:
        """Seconds left before expiry (negative once expired)."""
        return self.expires_at - time.monotonic()

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0

    def check(self, unit: str, phase: str) -> None:
        """
        Raise when the budget is spent.

        :raises TransactionTimeoutError: If the deadline has passed.
        """
        if self.expired:
            log.warning(
                "deadline exceeded",
                extra={"unit": unit, "phase": phase},
            )
            raise TransactionTimeoutError(unit, phase)

    def arm(self, conn: Connection, *, owns_transaction: bool) -> None:
        """Install the dialect-specific statement interruption on ``conn``."""
        dialect = conn.dialect.name
        if dialect == "postgresql":
            if owns_transaction:
                timeout_ms = max(1, int(self.remaining() * 1000))
                conn.exec_driver_sql(f"SET LOCAL statement_timeout = {timeout_ms}")
        elif dialect == "sqlite":
            raw = conn.connection.driver_connection
            if raw is not None:
                raw.set_progress_handler(self._interrupt_if_expired, SQLITE_PROGRESS_STEPS)
                self._driver_conn = raw

    def disarm(self) -> None:
        """Remove anything :meth:`arm` installed. Safe to call more than once."""
        raw, self._driver_conn = self._driver_conn, None
        if raw is not None:
            with suppress(Exception):
                raw.set_progress_handler(None, 0)

    def _interrupt_if_expired(self) -> int:
        # Non-zero aborts the current SQLite statement with "interrupted".
        return 1 if time.monotonic() >= self.expires_at else 0
