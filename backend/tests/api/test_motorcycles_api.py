"""HTTP tests for the ``/api/v1/motorcycles`` endpoints."""

from __future__ import annotations

from tests.factories.motorcycle import MotorcycleFactory
from tests.factories.user import UserFactory
from tests.helpers.http import json_headers, sign_in, sign_up

MOTORCYCLES = "/api/v1/motorcycles"

LISTING = {
    "post_title": "Honda CB500F, one owner",
    "price": 4990.5,
    "type": "naked",
    "mileage": 12000,
    "brand": "Honda",
    "model": "CB500F",
    "year": 2019,
    "engine": "471cc",
    "color": "red",
    "description": "Serviced every year.",
    "location": "Valencia",
}


class TestMotorcyclesApi:
    def test_create_ignores_owner_id_in_body(self, client):
        """
        GIVEN user 1 is signed in and user 2 exists
        WHEN user 1 posts a listing claiming owner_id 2
        THEN the listing belongs to user 1.
        """
        me = sign_up(client, email="a@b.com", password="pw123456")
        other = UserFactory().id
        token = sign_in(client, "a@b.com", "pw123456")

        resp = client.post(
            MOTORCYCLES, json={**LISTING, "owner_id": other}, headers=json_headers(token)
        )

        assert resp.status_code == 201
        listing_id = resp.get_json()["inserted_id"]
        mine = client.get(MOTORCYCLES, headers=json_headers(token)).get_json()
        assert [m["id"] for m in mine] == [listing_id]
        assert mine[0]["owner_id"] == me
        assert mine[0]["price"] == 4990.5

    def test_create_requires_a_token(self, client):
        resp = client.post(MOTORCYCLES, json=LISTING)

        assert resp.status_code == 401
        assert "WWW-Authenticate" in resp.headers

    def test_invalid_listing_is_422(self, client):
        sign_up(client)
        token = sign_in(client, "ana@example.com", "pw123456")

        resp = client.post(
            MOTORCYCLES, json={"post_title": "", "price": -1}, headers=json_headers(token)
        )

        assert resp.status_code == 422
        errors = resp.get_json()["details"]["errors"]
        assert {"post_title", "price", "year"} <= set(errors)

    def test_images_are_returned_with_the_listing(self, client):
        sign_up(client)
        token = sign_in(client, "ana@example.com", "pw123456")
        urls = ["https://img.example.com/a.jpg", "https://img.example.com/b.jpg"]

        client.post(MOTORCYCLES, json={**LISTING, "image_urls": urls}, headers=json_headers(token))

        [listing] = client.get(MOTORCYCLES, headers=json_headers(token)).get_json()
        assert [i["url"] for i in listing["images"]] == urls

    def test_list_is_newest_first_and_paginated(self, client):
        owner_id = sign_up(client)
        token = sign_in(client, "ana@example.com", "pw123456")
        MotorcycleFactory.create_batch(11, owner_id=owner_id, owner=None)
        newest = client.post(MOTORCYCLES, json=LISTING, headers=json_headers(token)).get_json()

        first = client.get(MOTORCYCLES, headers=json_headers(token)).get_json()
        second = client.get(f"{MOTORCYCLES}?page=2", headers=json_headers(token)).get_json()

        assert len(first) == 10
        assert len(second) == 2
        assert first[0]["id"] == newest["inserted_id"]
        ids = [m["id"] for m in first + second]
        assert ids == sorted(ids, reverse=True)
