"""Configuration shared by the fixtures and the tests that build their own app."""

from __future__ import annotations

from motomarket.core.config import TestingConfig

TEST_JWT_SECRET = "test-secret-for-motomarket-0123456789abcdef"


class TestConfig(TestingConfig):
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Minimal bcrypt cost keeps hashing fast.
    - Proxy handling is off; the test client talks to the app directly.
    - The database URI is filled in per test by the ``app`` fixture.
    """

    __test__ = False  # not a pytest test class

    JWT_SECRET = TEST_JWT_SECRET
    BCRYPT_ROUNDS = 4
    USE_PROXYFIX = False
    LOG_LEVEL = "WARNING"
    CORS_ORIGINS = "*"
