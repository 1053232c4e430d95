from __future__ import annotations

from motomarket.repositories import MotorcycleRepository

from tests.factories.motorcycle import MotorcycleFactory, MotorcycleImageFactory
from tests.factories.user import UserFactory


class TestMotorcycleRepository:
    def test_list_for_owner_only_returns_that_owner_newest_first(self, db):
        owner = UserFactory()
        other = UserFactory()
        mine = [MotorcycleFactory(owner=owner) for _ in range(3)]
        MotorcycleFactory(owner=other)
        expected = [m.id for m in reversed(mine)]
        owner_id = owner.id

        repo = MotorcycleRepository(session=db.session)
        listed = repo.list_for_owner(owner_id, page=1, limit=10)

        # Rows created within the same second tie on created_at; id breaks the tie.
        assert [m.id for m in listed] == expected
        assert {m.owner_id for m in listed} == {owner_id}
        db.session.rollback()

    def test_list_for_owner_pages(self, db):
        owner = UserFactory()
        MotorcycleFactory.create_batch(12, owner=owner)
        owner_id = owner.id

        repo = MotorcycleRepository(session=db.session)

        assert len(repo.list_for_owner(owner_id, page=1, limit=10)) == 10
        assert len(repo.list_for_owner(owner_id, page=2, limit=10)) == 2
        assert repo.list_for_owner(owner_id, page=3, limit=10) == []
        db.session.rollback()

    def test_images_are_loaded_with_the_listing(self, db):
        image = MotorcycleImageFactory()
        motorcycle_id = image.motorcycle_id

        repo = MotorcycleRepository(session=db.session)
        listing = repo.get(motorcycle_id)

        assert [i.url for i in listing.images] == [image.url]
        db.session.rollback()
