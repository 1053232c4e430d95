"""
motomarket.services._shared.ports
=================================

Collection of *ports* (hexagonal interfaces) that define the contracts for
credential hashing and bearer-token handling.

Modules
-------
- :mod:`password_hasher`:
    Defines :class:`~.PasswordHasher`: one-way hashing and verification.

- :mod:`token_codec`:
    Defines :class:`~.TokenCodec`: issuing and verifying signed bearer tokens.

Design Notes
------------
Services depend on these protocols only. Concrete adapters (bcrypt, PyJWT)
live under ``motomarket.infra`` and are bound to the application in
``motomarket.core.extensions``.
"""

from __future__ import annotations

from .password_hasher import PasswordHasher
from .token_codec import TOKEN_LIFETIME, TokenCodec

__all__ = [
    "PasswordHasher",
    "TokenCodec",
    "TOKEN_LIFETIME",
]
