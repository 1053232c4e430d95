"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from motomarket.repositories.base import BaseRepository, paginate_select
from motomarket.repositories.motorcycle import MotorcycleRepository
from motomarket.repositories.user import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    "paginate_select",
    # Domain
    "MotorcycleRepository",
    "UserRepository",
]
