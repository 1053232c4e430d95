from __future__ import annotations

from typing import Protocol


class PasswordHasher(Protocol):
    """Port for slow, salted, one-way password hashing."""

    def hash(self, plaintext: str) -> str:
        """
        Hash ``plaintext`` with a fresh salt.

        :raises HashingError: On internal failure of the hash function.
        """
        ...

    def verify(self, hashed: str, plaintext: str) -> None:
        """
        Check ``plaintext`` against ``hashed``.

        :raises MismatchError: When the password is wrong.
        :raises VerificationError: When ``hashed`` is malformed or checking fails.
        """
        ...

    def dummy_verify(self, plaintext: str) -> None:
        """Burn the same work as :meth:`verify` without a stored hash."""
        ...
