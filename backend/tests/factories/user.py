"""Factory Boy definition for :class:`motomarket.models.user.User`."""

from __future__ import annotations

import bcrypt
import factory
from motomarket.models.user import User

from tests.factories import BaseFactory

DEFAULT_PASSWORD = "Passw0rd!"


def hash_password(plaintext: str) -> str:
    """bcrypt hash at the minimum cost, compatible with the app's hasher."""
    return bcrypt.hashpw(plaintext.encode("utf-8"), bcrypt.gensalt(4)).decode("utf-8")


class UserFactory(BaseFactory):
    """
    Build persisted :class:`motomarket.models.user.User` instances.

    Pass ``raw_password="..."`` to choose the plaintext; the stored
    ``password`` is always its bcrypt hash.
    """

    class Meta:
        model = User
        exclude = ("raw_password",)

    id = None  # let autoincrement handle it
    first_name = factory.Faker("first_name")
    last_name = factory.Faker("last_name")
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    phone_number = factory.Faker("numerify", text="+34 6## ### ###")
    raw_password = DEFAULT_PASSWORD
    password = factory.LazyAttribute(lambda o: hash_password(o.raw_password))
