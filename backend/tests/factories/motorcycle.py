"""Factory Boy definitions for listings."""

from __future__ import annotations

import factory
from motomarket.models.motorcycle import Motorcycle, MotorcycleImage

from tests.factories import BaseFactory
from tests.factories.user import UserFactory


class MotorcycleFactory(BaseFactory):
    """Persisted :class:`Motorcycle` owned by a freshly created user by default."""

    class Meta:
        model = Motorcycle
        exclude = ("owner",)

    id = None
    owner = factory.SubFactory(UserFactory)
    owner_id = factory.SelfAttribute("owner.id")
    post_title = factory.Sequence(lambda n: f"Listing #{n}")
    price = factory.Faker("pyfloat", left_digits=5, right_digits=2, positive=True)
    type = "naked"
    mileage = factory.Faker("pyint", min_value=0, max_value=90000)
    brand = factory.Iterator(["Honda", "Yamaha", "Ducati", "BMW"])
    model = factory.Faker("bothify", text="??-###")
    year = factory.Faker("pyint", min_value=1990, max_value=2025)
    engine = "700cc"
    color = factory.Faker("color_name")
    description = factory.Faker("sentence")
    location = factory.Faker("city")


class MotorcycleImageFactory(BaseFactory):
    class Meta:
        model = MotorcycleImage
        exclude = ("motorcycle",)

    id = None
    motorcycle = factory.SubFactory(MotorcycleFactory)
    motorcycle_id = factory.SelfAttribute("motorcycle.id")
    url = factory.Sequence(lambda n: f"https://img.example.com/{n}.jpg")
