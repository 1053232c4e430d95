"""
ListingService
==============

Owner-scoped motorcycle listings. Every operation takes the caller's
:class:`Identity`; no code path accepts an owner id from the client.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from motomarket.models.motorcycle import Motorcycle
from motomarket.repositories.motorcycle import MotorcycleRepository
from motomarket.services._shared.base import PAGE_SIZE, BaseService
from motomarket.services._shared.identity import Identity
from motomarket.services.listings.dto import ImageOut, MotorcycleCreationIn, MotorcycleOut

log = logging.getLogger(__name__)

CREATE_BUDGET = timedelta(seconds=3)


class ListingService(BaseService):
    """Create and list the caller's motorcycle listings."""

    def create(self, identity: Identity, dto: MotorcycleCreationIn) -> int:
        """
        Store a new listing owned by ``identity`` and return its id.

        :param identity: Authenticated caller; becomes the owner.
        :type identity: :class:`Identity`
        :param dto: Listing input (text fields are trimmed).
        :type dto: :class:`MotorcycleCreationIn`
        :returns: Generated listing id.
        :rtype: int
        """
        with self.rw_uow(name="motorcycles.create", budget=CREATE_BUDGET) as uow:
            repo: MotorcycleRepository = uow.motorcycles
            motorcycle = repo.add(
                Motorcycle(
                    owner_id=identity.subject_id,
                    post_title=self.clean(dto.post_title),
                    price=dto.price,
                    type=self.clean(dto.type),
                    mileage=dto.mileage,
                    brand=self.clean(dto.brand),
                    model=self.clean(dto.model),
                    year=dto.year,
                    engine=self.clean(dto.engine),
                    color=self.clean(dto.color),
                    description=self.clean(dto.description),
                    location=self.clean(dto.location),
                )
            )
            urls = [u for u in (self.clean(url) for url in dto.image_urls) if u]
            if urls:
                repo.add_images(motorcycle, urls)
            motorcycle_id = motorcycle.id

        log.info("listing %s created", motorcycle_id, extra={"subject_id": identity.subject_id})
        return motorcycle_id

    def get_from_user(self, identity: Identity, page: int | None = 1) -> list[MotorcycleOut]:
        """
        Return one page (``PAGE_SIZE``) of the caller's listings, newest first.
        """
        with self.ro_uow(name="motorcycles.get_from_user") as uow:
            items = uow.motorcycles.list_for_owner(
                identity.subject_id, page=self.ensure_page(page), limit=PAGE_SIZE
            )
            return [self._to_out(m) for m in items]

    @staticmethod
    def _to_out(motorcycle: Motorcycle) -> MotorcycleOut:
        return MotorcycleOut(
            id=motorcycle.id,
            owner_id=motorcycle.owner_id,
            post_title=motorcycle.post_title,
            price=motorcycle.price,
            type=motorcycle.type,
            mileage=motorcycle.mileage,
            brand=motorcycle.brand,
            model=motorcycle.model,
            year=motorcycle.year,
            engine=motorcycle.engine,
            color=motorcycle.color,
            description=motorcycle.description,
            location=motorcycle.location,
            images=[
                ImageOut(id=i.id, url=i.url, created_at=i.created_at, updated_at=i.updated_at)
                for i in motorcycle.images
            ],
            created_at=motorcycle.created_at,
            updated_at=motorcycle.updated_at,
        )
