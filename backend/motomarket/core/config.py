"""Environment-driven settings, one class per deployment environment.

``APP_ENV`` picks the class (``development`` | ``testing`` | ``production``);
individual values come from environment variables, with a ``.env`` file
loaded first when present.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any, Final

from dotenv import load_dotenv

ENV_VAR: Final[str] = "APP_ENV"

load_dotenv()

_TRUTHY = frozenset({"1", "true", "yes", "y", "on"})


def env_bool(name: str, default: bool = False) -> bool:
    """Read a boolean flag; ``1/true/yes/y/on`` (any case) mean ``True``."""
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in _TRUTHY


def env_int(name: str, default: int) -> int:
    """Read an integer, falling back to ``default`` when unset or blank."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val)


class BaseConfig:
    """Settings shared by every environment.

    Attributes
    ----------
    JWT_SECRET: str | None
        HMAC secret for bearer tokens. Required: ``create_app`` raises
        ``ConfigurationError`` when it is missing or blank.
    JWT_ALGORITHM: str
        Signing algorithm; tokens signed any other way are rejected.
    BCRYPT_ROUNDS: int
        Cost factor for new password hashes.
    SQLALCHEMY_DATABASE_URI: str
        From ``DATABASE_URL``. PostgreSQL in production; SQLite works for
        local runs and tests.
    SQLALCHEMY_ENGINE_OPTIONS: dict
        ``pool_pre_ping`` drops connections the server closed while idle.
    USE_PROXYFIX / PROXYFIX_HOPS
        Trust ``X-Forwarded-*`` from this many reverse proxies.
    LOG_LEVEL: str
        Root logger level.
    CORS_ORIGINS: str
        Comma-separated allowed origins for ``/api/*`` (``*`` for any).
    APP_VERSION: str
        Reported by the health endpoint.
    """

    API_BASE_PREFIX = "/api"
    APP_VERSION = os.getenv("APP_VERSION", "dev")

    JWT_SECRET = os.getenv("JWT_SECRET")
    JWT_ALGORITHM = "HS256"
    BCRYPT_ROUNDS = env_int("BCRYPT_ROUNDS", 12)

    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./motomarket.sqlite")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    SQLALCHEMY_ENGINE_OPTIONS: dict[str, Any] = {"pool_pre_ping": True}

    PROPAGATE_EXCEPTIONS = False
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)
    PROXYFIX_HOPS = env_int("PROXYFIX_HOPS", 1)

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    CORS_MAX_AGE = 600

    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Local development: debug on, SQL echo on request."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    USE_PROXYFIX = env_bool("USE_PROXYFIX", False)


class TestingConfig(BaseConfig):
    """Automated tests.

    Notes
    -----
    - ``TEST_DATABASE_URL`` overrides the in-memory SQLite default.
    - bcrypt runs at its minimum cost.
    """

    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    BCRYPT_ROUNDS = 4


class ProductionConfig(BaseConfig):
    """Production behind a reverse proxy; gunicorn owns the process."""

    SQLALCHEMY_ECHO = False


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config(name: str | None = None) -> type[BaseConfig]:
    """Return the settings class for ``name``, or for ``APP_ENV`` when omitted.

    Unknown names fall back to :class:`DevelopmentConfig`.
    """
    name = (name or os.getenv(ENV_VAR, "development")).strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
