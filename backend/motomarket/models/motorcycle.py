"""Motorcycle listings and their images."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from motomarket.core.extensions import db

from .base import Entity

if TYPE_CHECKING:
    from .user import User


class Motorcycle(Entity, db.Model):
    """
    A motorcycle-for-sale post.

    Owned by exactly one :class:`User`; ``owner_id`` is always taken from the
    authenticated caller when the row is created.
    """

    __tablename__ = "motorcycle"
    __repr_attrs__ = ("owner_id", "post_title")

    owner_id: Mapped[int] = mapped_column(
        ForeignKey("user.id", ondelete="CASCADE"), nullable=False
    )
    post_title: Mapped[str] = mapped_column(String(200), nullable=False)
    price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    mileage: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    brand: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    model: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    engine: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    color: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    location: Mapped[str] = mapped_column(String(200), nullable=False, default="")

    __table_args__ = (Index("ix_motorcycle_owner_created", "owner_id", "created_at"),)

    owner: Mapped[User] = relationship("User", back_populates="motorcycles", lazy="raise")
    images: Mapped[list[MotorcycleImage]] = relationship(
        "MotorcycleImage",
        back_populates="motorcycle",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="MotorcycleImage.id",
        lazy="selectin",
    )


class MotorcycleImage(Entity, db.Model):
    """Picture attached to a :class:`Motorcycle`."""

    __tablename__ = "motorcycle_image"

    motorcycle_id: Mapped[int] = mapped_column(
        ForeignKey("motorcycle.id", ondelete="CASCADE"), nullable=False
    )
    url: Mapped[str] = mapped_column(String(2048), nullable=False)

    __table_args__ = (Index("ix_motorcycle_image_motorcycle", "motorcycle_id"),)

    motorcycle: Mapped[Motorcycle] = relationship(
        "Motorcycle", back_populates="images", lazy="raise"
    )
