"""User model: identity, credential and profile of a marketplace account."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from motomarket.core.extensions import db

from .base import Entity

if TYPE_CHECKING:
    from .motorcycle import Motorcycle


class User(Entity, db.Model):
    """
    Marketplace account.

    Fields
    ------
    first_name : str
        Required given name.
    middle_name, last_name, surname : str | None
        Optional name parts (``NULL`` when not provided).
    email : str
        Login email. Stored trimmed and compared case-sensitively; unique.
    phone_number : str
        Contact number (may be empty).
    picture_url : str | None
        Optional avatar URL.
    password : str
        bcrypt hash. Never the plaintext and never serialized.
    created_at, updated_at : datetime
        Timestamps (from mixin).
    """

    __tablename__ = "user"
    __repr_attrs__ = ("email",)

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    middle_name: Mapped[str | None] = mapped_column(String(100))
    last_name: Mapped[str | None] = mapped_column(String(100))
    surname: Mapped[str | None] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    picture_url: Mapped[str | None] = mapped_column(String(2048))
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (UniqueConstraint("email", name="uq_user_email"),)

    motorcycles: Mapped[list[Motorcycle]] = relationship(
        "Motorcycle", back_populates="owner", passive_deletes=True, lazy="raise"
    )
