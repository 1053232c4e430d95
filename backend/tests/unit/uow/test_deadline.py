from __future__ import annotations

from datetime import timedelta

import pytest
from motomarket.services._shared.errors import TransactionTimeoutError
from motomarket.uow import Deadline


class TestDeadline:
    def test_fresh_deadline_has_time_left(self):
        deadline = Deadline.after(timedelta(seconds=30))

        assert not deadline.expired
        assert 0 < deadline.remaining() <= 30
        deadline.check("test.unit", "begin")

    def test_zero_budget_is_already_expired(self):
        deadline = Deadline.after(timedelta(0))

        assert deadline.expired
        with pytest.raises(TransactionTimeoutError) as excinfo:
            deadline.check("test.unit", "commit")

        assert excinfo.value.unit == "test.unit"
        assert excinfo.value.phase == "commit"

    def test_sqlite_progress_handler_is_installed_and_removed(self, db):
        deadline = Deadline.after(timedelta(seconds=30))
        conn = db.session.connection()

        deadline.arm(conn, owns_transaction=True)
        assert deadline._driver_conn is not None

        deadline.disarm()
        deadline.disarm()
        assert deadline._driver_conn is None
        db.session.rollback()

    def test_interrupt_callback_reflects_expiry(self):
        assert Deadline.after(timedelta(seconds=30))._interrupt_if_expired() == 0
        assert Deadline.after(timedelta(0))._interrupt_if_expired() == 1
