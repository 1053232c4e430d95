"""
Unit tests for SQLAlchemyUnitOfWork (writer), using factories.
"""

from __future__ import annotations

import sqlite3
import time
from datetime import timedelta

import pytest
from motomarket.models import User
from motomarket.services._shared.errors import (
    ConflictError,
    NotFoundError,
    StorageFaultError,
    TransactionTimeoutError,
)
from motomarket.uow import Deadline, SQLAlchemyUnitOfWork
from motomarket.uow.sqlalchemy_uow import translate_storage_error
from sqlalchemy import func, select, text
from sqlalchemy.exc import OperationalError

from tests.factories.user import UserFactory, hash_password

BUDGET = timedelta(seconds=5)


def _count_users(db) -> int:
    count = db.session.execute(select(func.count()).select_from(User)).scalar_one()
    db.session.rollback()
    return count


def _new_user(email: str = "uow@example.com") -> User:
    return User(first_name="Uow", email=email, password=hash_password("pw123456"))


class TestSQLAlchemyUnitOfWorkWriter:
    def test_writer_uow_commits_on_success(self, db):
        """
        GIVEN a writer UoW
        WHEN a user is added via the repository and the block exits cleanly
        THEN the transaction is committed and the row is visible afterwards.
        """
        initial = _count_users(db)

        with SQLAlchemyUnitOfWork(name="test.commit", budget=BUDGET) as uow:
            user = uow.users.add(_new_user())
            assert user.id is not None  # add() flushes

        assert _count_users(db) == initial + 1

    def test_writer_uow_rolls_back_on_exception(self, db):
        """
        GIVEN a writer UoW
        WHEN an exception is raised inside the context
        THEN the transaction is rolled back and the exception propagates unchanged.
        """
        initial = _count_users(db)

        with pytest.raises(RuntimeError, match="boom"):
            with SQLAlchemyUnitOfWork(name="test.rollback", budget=BUDGET) as uow:
                uow.users.add(_new_user())
                raise RuntimeError("boom")

        assert _count_users(db) == initial

    def test_service_errors_pass_through_after_rollback(self, db):
        initial = _count_users(db)

        with pytest.raises(NotFoundError):
            with SQLAlchemyUnitOfWork(name="test.passthrough", budget=BUDGET) as uow:
                uow.users.add(_new_user())
                raise NotFoundError("User", 99)

        assert _count_users(db) == initial

    def test_unique_violation_becomes_conflict(self, db):
        """
        GIVEN an existing user
        WHEN a second user with the same email is written
        THEN a ConflictError chained to the IntegrityError is raised and nothing is stored.
        """
        UserFactory(email="taken@example.com")
        initial = _count_users(db)

        with pytest.raises(ConflictError) as excinfo:
            with SQLAlchemyUnitOfWork(name="test.conflict", budget=BUDGET) as uow:
                uow.users.add(_new_user(email="taken@example.com"))

        assert excinfo.value.entity == "test.conflict"
        assert excinfo.value.__cause__ is not None
        assert _count_users(db) == initial

    def test_spent_budget_times_out_before_any_work(self, db):
        initial = _count_users(db)
        entered = False

        with pytest.raises(TransactionTimeoutError) as excinfo:
            with SQLAlchemyUnitOfWork(name="test.timeout", budget=timedelta(0)) as uow:
                entered = True
                uow.users.add(_new_user())

        assert entered is False
        assert excinfo.value.phase == "begin"
        assert _count_users(db) == initial

    def test_other_database_errors_become_storage_faults(self, db):
        with pytest.raises(StorageFaultError) as excinfo:
            with SQLAlchemyUnitOfWork(name="test.fault", budget=BUDGET) as uow:
                uow.session.execute(text("SELECT * FROM no_such_table"))

        assert excinfo.value.unit == "test.fault"
        assert excinfo.value.phase == "execute"
        assert excinfo.value.__cause__ is not None
        assert "no_such_table" not in str(excinfo.value)

    def test_session_is_reusable_after_a_failed_unit(self, db):
        UserFactory(email="dup@example.com")

        with pytest.raises(ConflictError):
            with SQLAlchemyUnitOfWork(name="test.first", budget=BUDGET) as uow:
                uow.users.add(_new_user(email="dup@example.com"))

        with SQLAlchemyUnitOfWork(name="test.second", budget=BUDGET) as uow:
            uow.users.add(_new_user(email="fresh@example.com"))

        assert db.session.execute(
            select(User.id).where(User.email == "fresh@example.com")
        ).scalar_one_or_none() is not None

    def test_writer_attaches_to_an_already_open_transaction(self, db):
        """
        GIVEN a session that already autobegan a transaction with a read
        WHEN a writer UoW is entered and stages a user
        THEN the unit joins that transaction and commits the row.
        """
        UserFactory(email="outer@example.com")
        db.session.execute(select(User.id)).all()
        assert db.session().get_transaction() is not None

        with SQLAlchemyUnitOfWork(name="test.attach", budget=BUDGET) as uow:
            uow.users.add(_new_user(email="inner@example.com"))

        assert db.session.execute(
            select(User.id).where(User.email == "inner@example.com")
        ).scalar_one_or_none() is not None

    def test_failed_unit_rolls_back_the_transaction_it_attached_to(self, db):
        initial = _count_users(db)
        db.session.execute(select(User.id)).all()
        outer = db.session().get_transaction()

        with pytest.raises(RuntimeError, match="boom"):
            with SQLAlchemyUnitOfWork(name="test.attach_fail", budget=BUDGET) as uow:
                uow.users.add(_new_user())
                raise RuntimeError("boom")

        assert outer.is_active is False
        assert db.session().get_transaction() is None
        assert _count_users(db) == initial

    def test_deadline_interrupts_a_running_statement(self, db):
        """
        GIVEN a writer UoW with a short budget
        WHEN a statement is still running as the budget runs out
        THEN SQLite aborts it and the unit raises a timeout for the execute phase.
        """
        slow = text(
            "WITH RECURSIVE n(x) AS (SELECT 1 UNION ALL SELECT x + 1 FROM n WHERE x < 1000000000)"
            " SELECT count(*) FROM n"
        )

        with pytest.raises(TransactionTimeoutError) as excinfo:
            with SQLAlchemyUnitOfWork(name="test.slow", budget=timedelta(milliseconds=100)) as uow:
                uow.session.execute(slow)

        assert excinfo.value.phase == "execute"
        assert excinfo.value.__cause__ is not None

    def test_budget_spent_inside_the_body_blocks_commit(self, db):
        initial = _count_users(db)

        with pytest.raises(TransactionTimeoutError) as excinfo:
            with SQLAlchemyUnitOfWork(name="test.late", budget=timedelta(milliseconds=200)) as uow:
                uow.users.add(_new_user(email="late@example.com"))
                time.sleep(0.3)

        assert excinfo.value.phase == "commit"
        assert _count_users(db) == initial


class _DriverError(Exception):
    def __init__(self, message: str, pgcode: str | None = None) -> None:
        super().__init__(message)
        self.pgcode = pgcode


def _operational(orig: Exception) -> OperationalError:
    return OperationalError('INSERT INTO "user" (email) VALUES (?)', {}, orig)


class TestTranslateStorageError:
    def test_serialization_failure_is_a_conflict(self):
        exc = _operational(_DriverError("could not serialize access", pgcode="40001"))

        err = translate_storage_error(
            exc, unit="users.sign_up", phase="commit", deadline=Deadline.after(BUDGET)
        )

        assert isinstance(err, ConflictError)
        assert err.entity == "users.sign_up"

    def test_sqlite_busy_is_a_conflict(self):
        exc = _operational(sqlite3.OperationalError("database is locked"))

        err = translate_storage_error(
            exc, unit="users.sign_up", phase="execute", deadline=Deadline.after(BUDGET)
        )

        assert isinstance(err, ConflictError)

    def test_other_operational_errors_stay_storage_faults(self):
        exc = _operational(_DriverError("server closed the connection", pgcode="08006"))

        err = translate_storage_error(
            exc, unit="users.sign_up", phase="execute", deadline=Deadline.after(BUDGET)
        )

        assert isinstance(err, StorageFaultError)
        assert err.phase == "execute"

    def test_expired_deadline_wins_over_serialization_failure(self):
        exc = _operational(_DriverError("canceling statement", pgcode="40001"))

        err = translate_storage_error(
            exc, unit="users.sign_up", phase="execute", deadline=Deadline.after(timedelta(0))
        )

        assert isinstance(err, TransactionTimeoutError)
