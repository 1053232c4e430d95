"""DTOs for ListingService."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True, slots=True)
class MotorcycleCreationIn:
    """
    Input DTO for a new listing.

    There is deliberately no ``owner_id``: the owner is always the caller.

    :param post_title: Listing headline.
    :type post_title: str
    :param price: Asking price.
    :type price: float
    :param year: Model year.
    :type year: int
    :param image_urls: Optional picture URLs stored with the listing.
    :type image_urls: tuple[str, ...]
    """

    post_title: str
    price: float
    year: int
    type: str = ""
    mileage: int = 0
    brand: str = ""
    model: str = ""
    engine: str = ""
    color: str = ""
    description: str = ""
    location: str = ""
    image_urls: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class ImageOut:
    id: int
    url: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True, slots=True)
class MotorcycleOut:
    """Listing as returned to its owner, images included."""

    id: int
    owner_id: int
    post_title: str
    price: float
    type: str
    mileage: int
    brand: str
    model: str
    year: int
    engine: str
    color: str
    description: str
    location: str
    images: list[ImageOut]
    created_at: datetime
    updated_at: datetime
