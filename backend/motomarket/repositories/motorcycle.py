"""Motorcycle listing repository."""

from __future__ import annotations

from sqlalchemy import select

from motomarket.models.motorcycle import Motorcycle, MotorcycleImage
from motomarket.repositories.base import BaseRepository, paginate_select


class MotorcycleRepository(BaseRepository[Motorcycle]):
    """Persistence-only repository for :class:`Motorcycle` and its images."""

    model = Motorcycle

    def add_images(self, motorcycle: Motorcycle, urls: list[str]) -> list[MotorcycleImage]:
        """Attach one image row per URL to ``motorcycle`` and flush."""
        images = [MotorcycleImage(motorcycle_id=motorcycle.id, url=url) for url in urls]
        self.session.add_all(images)
        self.flush()
        return images

    def list_for_owner(self, owner_id: int, *, page: int, limit: int) -> list[Motorcycle]:
        """
        List the listings owned by ``owner_id``, newest first.

        Images are loaded eagerly (``selectin``) with the page.
        """
        stmt = (
            select(Motorcycle)
            .where(Motorcycle.owner_id == owner_id)
            .order_by(Motorcycle.created_at.desc(), Motorcycle.id.desc())
        )
        return paginate_select(self.session, stmt, page=page, limit=limit)
