"""
Unit of Work contract shared by the writer and the read-only unit.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import timedelta
from types import TracebackType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from motomarket.repositories import MotorcycleRepository, UserRepository


class UnitOfWork(ABC):
    """
    One transactional boundary for one service operation.

    A unit is named after the operation it serves (``"users.sign_up"``) and
    carries the time ``budget`` it may spend between begin and commit.
    Repositories exposed on the unit share its session, so everything they
    stage commits or rolls back together.
    """

    name: str
    budget: timedelta

    users: UserRepository
    motorcycles: MotorcycleRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...

    @abstractmethod
    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...
