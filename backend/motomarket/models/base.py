"""Column conventions shared by every marketplace table (typed 2.0)."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column


class Entity:
    """
    Mixin giving a table its surrogate key, audit timestamps and a short repr.

    Attributes
    ----------
    id:
        Integer primary key assigned by the database; never changes.
    created_at:
        Set by the database on insert. Listing order relies on it.
    updated_at:
        Set on insert and refreshed on ORM updates. Bulk ``UPDATE``
        statements (see ``UserRepository.update_profile``) set it themselves.
    """

    #: Extra attributes shown by ``repr`` after the id.
    __repr_attrs__: ClassVar[tuple[str, ...]] = ()

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        # Read from __dict__ so repr never triggers a lazy load or refresh.
        state = self.__dict__
        parts = [f"id={state.get('id')}"]
        parts += [f"{name}={state.get(name)!r}" for name in self.__repr_attrs__]
        return f"<{type(self).__name__} {' '.join(parts)}>"
