"""
SQLAlchemy implementation of UnitOfWork for Flask.
"""

from __future__ import annotations

import logging
from contextlib import suppress
from datetime import timedelta

from sqlalchemy import event, text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import (
    IntegrityError,
    InvalidRequestError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.orm import Session, SessionTransaction, scoped_session

from motomarket.core.extensions import db
from motomarket.repositories import MotorcycleRepository, UserRepository
from motomarket.services._shared.errors import (
    ConflictError,
    ServiceError,
    StorageFaultError,
    TransactionTimeoutError,
)
from motomarket.uow.base import UnitOfWork
from motomarket.uow.deadline import Deadline

log = logging.getLogger(__name__)


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share a SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=self.session)
        self.motorcycles = MotorcycleRepository(session=self.session)


# serialization_failure, deadlock_detected
SERIALIZATION_SQLSTATES = frozenset({"40001", "40P01"})
SQLITE_BUSY_MESSAGES = ("database is locked", "database table is locked")


def is_serialization_failure(exc: OperationalError) -> bool:
    """
    Tell whether ``exc`` means another transaction won a write race.

    PostgreSQL reports it through SQLSTATE (``pgcode`` on psycopg2,
    ``sqlstate`` on psycopg 3); SQLite only through the busy message.
    """
    orig = exc.orig
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate in SERIALIZATION_SQLSTATES:
        return True
    message = str(orig).lower()
    return any(busy in message for busy in SQLITE_BUSY_MESSAGES)


def translate_storage_error(
    exc: SQLAlchemyError, *, unit: str, phase: str, deadline: Deadline
) -> ServiceError:
    """
    Map a SQLAlchemy error raised inside a unit of work to the service taxonomy.

    The full driver message is logged here, once; the returned error carries
    only the unit name and phase, with ``exc`` expected as its ``__cause__``.
    """
    if isinstance(exc, IntegrityError):
        log.info(
            "integrity violation: %s",
            exc.orig,
            extra={"unit": unit, "phase": phase},
        )
        return ConflictError(unit, "unique or foreign-key constraint violated")
    if isinstance(exc, OperationalError) and deadline.expired:
        log.warning(
            "statement interrupted by deadline: %s",
            exc.orig,
            extra={"unit": unit, "phase": phase},
        )
        return TransactionTimeoutError(unit, phase)
    if isinstance(exc, OperationalError) and is_serialization_failure(exc):
        log.info(
            "concurrent write lost: %s",
            exc.orig,
            extra={"unit": unit, "phase": phase},
        )
        return ConflictError(unit, "concurrent transaction won")
    log.error(
        "storage fault: %s",
        exc,
        extra={"unit": unit, "phase": phase},
        exc_info=exc,
    )
    return StorageFaultError(unit, phase)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Serializable, deadline-bound, all-or-nothing Unit of Work.

    The same Flask-scoped session is shared across all repositories for a
    consistent transaction.

    Lifecycle
    ---------
    1. ``__enter__`` snapshots a :class:`Deadline`, begins a transaction at
       ``SERIALIZABLE`` isolation and arms the deadline on the connection.
    2. The body stages writes through repositories (``add`` flushes, so
       generated ids are available immediately).
    3. ``__exit__`` commits when the body succeeded and the deadline still
       holds; otherwise it rolls back. Rollback is skipped once commit
       succeeded.

    Failures surface as :class:`ConflictError` (constraint violation or a
    lost serialization race), :class:`TransactionTimeoutError` (deadline) or
    :class:`StorageFaultError` (anything else from the database). Service errors raised by the body
    propagate unchanged after the rollback.

    Parameters
    ----------
    name:
        Operation name used in logs and error messages (e.g. ``"users.sign_up"``).
    budget:
        Time allowed between begin and commit.
    """

    ISOLATION_LEVEL = "SERIALIZABLE"

    def __init__(self, *, name: str, budget: timedelta) -> None:
        """Initialise the Unit of Work with a shared SQLAlchemy session.

        All repositories receive the same session instance so that they operate
        within the identical transactional context.
        """
        super().__init__(session=db.session)
        self.name = name
        self.budget = budget
        self._deadline: Deadline | None = None
        self._txn: SessionTransaction | None = None
        self._committed = False

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        deadline = Deadline.after(self.budget)
        self._deadline = deadline
        self._committed = False
        deadline.check(self.name, "begin")

        # scoped_session proxies begin() but not get_transaction(); work on the
        # concrete Session bound to this app context.
        session: Session = self.session()
        owns_transaction = True
        try:
            self._txn = session.begin()
        except InvalidRequestError:
            # A transaction is already open on this session (autobegin or an
            # outer scope). Attach to it; its isolation level is inherited.
            owns_transaction = False
            self._txn = session.get_transaction()
            log.debug("attaching to an open transaction", extra={"unit": self.name})

        try:
            options = {"isolation_level": self.ISOLATION_LEVEL} if owns_transaction else None
            conn: Connection = self.session.connection(execution_options=options)
            deadline.arm(conn, owns_transaction=owns_transaction)
        except SQLAlchemyError as exc:
            self._release(deadline, self._txn)
            raise translate_storage_error(
                exc, unit=self.name, phase="begin", deadline=deadline
            ) from exc
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # Snapshot before anything below can rebind instance state.
        deadline = self._deadline or Deadline.after(self.budget)
        txn = self._txn
        try:
            if exc is None:
                deadline.check(self.name, "commit")
                try:
                    self.commit()
                except SQLAlchemyError as commit_exc:
                    raise translate_storage_error(
                        commit_exc, unit=self.name, phase="commit", deadline=deadline
                    ) from commit_exc
            elif isinstance(exc, SQLAlchemyError):
                raise translate_storage_error(
                    exc, unit=self.name, phase="execute", deadline=deadline
                ) from exc
        finally:
            self._release(deadline, txn)

    def commit(self) -> None:
        self.session.commit()
        self._committed = True

    def rollback(self) -> None:
        self._rollback(self._txn)

    def _rollback(self, txn: SessionTransaction | None) -> None:
        # Only roll back the transaction this unit began or attached to; once
        # it has closed there is nothing left to undo.
        if txn is not None and txn is self.session().get_transaction():
            txn.rollback()

    def _release(self, deadline: Deadline, txn: SessionTransaction | None) -> None:
        deadline.disarm()
        if not self._committed:
            self._rollback(txn)
        self._txn = None
        self._deadline = None


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only, deadline-bound Unit of Work backed by the Flask-scoped session.

    This UoW:
    - Optionally sets the transaction isolation level via
      ``SET TRANSACTION ISOLATION LEVEL <...>`` (PostgreSQL/MySQL only).
    - Applies database-level READ ONLY when enabled (``SET TRANSACTION READ ONLY``).
    - Installs portable write-guards and always rolls back on exit.
    - Bounds the reads with the same :class:`Deadline` as the writer.
    - Disallows ``commit()``.

    Parameters
    ----------
    name:
        Operation name used in logs and error messages.
    budget:
        Time allowed for the reads.
    isolation_level:
        Optional transaction isolation level hint. If ``None``, the
        connection's default is used.
    enforce_db_readonly:
        If ``True`` (default), applies ``SET TRANSACTION READ ONLY`` when supported.

    Notes
    -----
    *PostgreSQL*: fully supported (read-only + isolation + statement timeout).
    *SQLite*: read-only flag is not supported; write-guards still prevent
    writes and a progress handler enforces the deadline.
    """

    # Guard patterns for portable "no write" at driver level
    _WRITE_PREFIXES = (
        "insert",
        "update",
        "delete",
        "merge",
        "alter",
        "drop",
        "truncate",
        "create",
        "replace",
        "grant",
        "revoke",
    )
    _SET_TRANSACTION_DIALECTS = ("postgresql", "mysql", "mariadb")

    def __init__(
        self,
        *,
        name: str,
        budget: timedelta,
        isolation_level: str | None = "READ COMMITTED",
        enforce_db_readonly: bool = True,
    ) -> None:
        super().__init__(session=db.session)
        self.name = name
        self.budget = budget
        self.isolation_level = isolation_level
        self.enforce_db_readonly = enforce_db_readonly

        # Internal state for listener lifecycle and transaction scope
        self._conn: Connection | None = None
        self._txn_ctx: SessionTransaction | None = None
        self._deadline: Deadline | None = None
        self._listeners_installed = False

    # ----------------------------- Context Manager -----------------------------

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """Enter a transactional scope that enforces read protections when possible.

        The unit of work first tries to own a fresh transaction so it can issue
        dialect-specific ``SET TRANSACTION`` directives. If SQLAlchemy reports
        that a transaction is already running (``InvalidRequestError``), the
        scope attaches to that outer transaction instead. In that fallback path
        the guards still intercept ORM flushes and raw DML, but the effective
        isolation follows the parent transaction.
        """
        deadline = Deadline.after(self.budget)
        self._deadline = deadline
        deadline.check(self.name, "begin")

        self._txn_ctx = None
        self._conn = None
        try:
            self._txn_ctx = self.session.begin()
        except InvalidRequestError:
            pass

        self._conn = self.session.connection()
        dialect = self._conn.dialect.name

        self._install_listeners()

        owns_transaction = self._txn_ctx is not None
        if owns_transaction and dialect in self._SET_TRANSACTION_DIALECTS:
            try:
                if self.isolation_level:
                    iso = self.isolation_level.upper().strip()
                    if iso not in (
                        "READ COMMITTED",
                        "REPEATABLE READ",
                        "SERIALIZABLE",
                        "READ UNCOMMITTED",
                    ):
                        log.warning("Unknown isolation_level '%s'; attempting as-is.", iso)
                    self.session.execute(text(f"SET TRANSACTION ISOLATION LEVEL {iso}"))

                if self.enforce_db_readonly:
                    self.session.execute(text("SET TRANSACTION READ ONLY"))
            except SQLAlchemyError as exc:
                log.warning(
                    "SET TRANSACTION directives failed (%s). Falling back to guards-only.", exc
                )

        deadline.arm(self._conn, owns_transaction=owns_transaction)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        """
        Always remove guards and the deadline. Roll back only if we own the transaction.

        Database errors raised by the reads are translated like the writer's.
        """
        deadline = self._deadline or Deadline.after(self.budget)
        try:
            if self._txn_ctx is not None:
                with suppress(Exception):
                    self.session.rollback()
                self._txn_ctx = None
        finally:
            deadline.disarm()
            self._remove_listeners()
            self._conn = None
            self._deadline = None

        if isinstance(exc, SQLAlchemyError):
            raise translate_storage_error(
                exc, unit=self.name, phase="execute", deadline=deadline
            ) from exc

    # ----------------------------- Public API ---------------------------------

    def commit(self) -> None:
        """
        Disallow commit in read-only Unit of Work.

        :raises RuntimeError: always, to prevent accidental writes.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        """Rollback the current transaction if active."""
        self.session.rollback()

    # ----------------------------- Guards & Listeners --------------------------

    def _install_listeners(self) -> None:
        """Install ORM/db-level listeners to prevent any write attempt."""
        if self._listeners_installed:
            return

        # 1) Block ORM flushes that would emit DML.
        def _before_flush(session, flush_context, instances):
            if session.new or session.dirty or session.deleted:
                raise RuntimeError(
                    "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
                )

        # Bind to the concrete Session: a scoped_session target would register
        # the guard on its sessionmaker, i.e. for every thread.
        flush_target = self.session() if isinstance(self.session, scoped_session) else self.session
        event.listen(flush_target, "before_flush", _before_flush)

        # 2) Block raw DML/DDL at cursor level (covers text() / core emits).
        def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
            first_token = statement.lstrip().split(None, 1)[0].lower() if statement else ""
            if first_token.startswith(self._WRITE_PREFIXES):
                raise RuntimeError(
                    f"Read-only UnitOfWork: SQL statement blocked: {first_token.upper()}"
                )

        target = self._conn if self._conn is not None else self.session.get_bind()
        event.listen(target, "before_cursor_execute", _before_cursor_execute)

        # Keep refs for removal
        self._ro__flush_target = flush_target
        self._ro__before_flush = _before_flush
        self._ro__before_cursor_execute = _before_cursor_execute
        self._listeners_installed = True

    def _remove_listeners(self) -> None:
        """Detach previously installed listeners."""
        if not self._listeners_installed:
            return

        with suppress(Exception):
            event.remove(self._ro__flush_target, "before_flush", self._ro__before_flush)

        with suppress(Exception):
            target = self._conn if self._conn is not None else self.session.get_bind()
            event.remove(target, "before_cursor_execute", self._ro__before_cursor_execute)

        self._listeners_installed = False
