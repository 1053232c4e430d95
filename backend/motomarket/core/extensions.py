"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

from typing import cast

from flask import Flask, current_app
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

from motomarket.infra.jwt.jwt_token_codec import JWTTokenCodec
from motomarket.infra.security.bcrypt_hasher import BcryptPasswordHasher
from motomarket.services._shared.errors import ConfigurationError
from motomarket.services._shared.ports import PasswordHasher, TokenCodec

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)

TOKEN_CODEC_KEY = "motomarket.token_codec"
PASSWORD_HASHER_KEY = "motomarket.password_hasher"


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, and the credential primitives.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`motomarket.models` package to ensure SQLAlchemy metadata is
        ready for migrations.

    Raises
    ------
    ConfigurationError
        When ``JWT_SECRET`` is missing or blank. The process must not start
        with a guessable signing key.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from motomarket import models as _models  # noqa: F401

    migrate.init_app(app, db)

    secret = (app.config.get("JWT_SECRET") or "").strip()
    if not secret:
        raise ConfigurationError("JWT_SECRET is not configured; refusing to start.")

    app.extensions[TOKEN_CODEC_KEY] = JWTTokenCodec(
        secret=secret,
        algorithm=app.config.get("JWT_ALGORITHM", "HS256"),
    )
    app.extensions[PASSWORD_HASHER_KEY] = BcryptPasswordHasher(
        rounds=int(app.config.get("BCRYPT_ROUNDS", 12)),
    )


def get_token_codec() -> TokenCodec:
    """Return the token codec bound to the current application."""
    codec = current_app.extensions.get(TOKEN_CODEC_KEY)
    if codec is None:
        raise RuntimeError("Token codec is not initialized. Call init_app() first.")
    return cast(TokenCodec, codec)


def get_password_hasher() -> PasswordHasher:
    """Return the password hasher bound to the current application."""
    hasher = current_app.extensions.get(PASSWORD_HASHER_KEY)
    if hasher is None:
        raise RuntimeError("Password hasher is not initialized. Call init_app() first.")
    return cast(PasswordHasher, hasher)
