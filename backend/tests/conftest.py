"""Pytest fixtures configuring an isolated application and database per test.

Each test gets its own SQLite *file* database under ``tmp_path``. A file (not
``:memory:``) is used because units of work open their own transactions at
``SERIALIZABLE`` isolation and the concurrency tests need several
connections to see the same data.
"""

from __future__ import annotations

import os

import pytest
from motomarket.core.extensions import db as _db
from motomarket.factory import create_app
from motomarket.infra.jwt.jwt_token_codec import JWTTokenCodec
from motomarket.infra.security.bcrypt_hasher import BcryptPasswordHasher
from motomarket.services.accounts.service import AccountService
from motomarket.services.listings.service import ListingService

from tests.helpers.config import TEST_JWT_SECRET, TestConfig


@pytest.fixture()
def app(tmp_path):
    """Create an application bound to a fresh SQLite file and push its context.

    Yields
    ------
    flask.Flask
        Application with all tables created.
    """
    os.environ.pop("DATABASE_URL", None)
    config = type(
        "PerTestConfig",
        (TestConfig,),
        {"SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'motomarket.sqlite'}"},
    )
    app = create_app(config, instance_relative_config=False)
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()
        _db.engine.dispose()


@pytest.fixture()
def db(app):
    """Database extension bound to the testing application."""
    return _db


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture(scope="session")
def hasher():
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture(scope="session")
def codec():
    return JWTTokenCodec(secret=TEST_JWT_SECRET)


@pytest.fixture()
def accounts(app, hasher, codec):
    """:class:`AccountService` wired to fast test adapters."""
    return AccountService(hasher=hasher, codec=codec)


@pytest.fixture()
def listings(app):
    return ListingService()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk
