# motomarket/infra/security/bcrypt_hasher.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field

import bcrypt

from motomarket.services._shared.errors import HashingError, MismatchError, VerificationError
from motomarket.services._shared.ports import PasswordHasher

log = logging.getLogger(__name__)

# bcrypt only consumes the first 72 bytes; the library refuses longer input.
BCRYPT_MAX_BYTES = 72


@dataclass(slots=True)
class BcryptPasswordHasher(PasswordHasher):
    """
    Adapter for the ``bcrypt`` library.

    :param rounds: Cost factor (log2 of the key-expansion iterations), 4..31.
    """

    rounds: int = 12
    _dummy_hash: bytes = field(init=False, repr=False)

    def __post_init__(self) -> None:
        # A real hash at the configured cost lets unknown-email sign-ins spend
        # the same time as wrong-password ones.
        self._dummy_hash = bcrypt.hashpw(b"motomarket-dummy", bcrypt.gensalt(self.rounds))

    def hash(self, plaintext: str) -> str:
        try:
            hashed = bcrypt.hashpw(plaintext.encode("utf-8"), bcrypt.gensalt(self.rounds))
        except (ValueError, TypeError) as exc:
            log.error("password hashing failed: %s", exc)
            raise HashingError("Password hashing failed") from exc
        return hashed.decode("utf-8")

    def verify(self, hashed: str, plaintext: str) -> None:
        candidate = plaintext.encode("utf-8")
        if len(candidate) > BCRYPT_MAX_BYTES:
            # ``hash`` never produced a digest for such input.
            self.dummy_verify(plaintext[:BCRYPT_MAX_BYTES])
            raise MismatchError("Password does not match")
        try:
            matched = bcrypt.checkpw(candidate, hashed.encode("utf-8"))
        except (ValueError, TypeError) as exc:
            log.error("password verification failed: %s", exc)
            raise VerificationError("Stored password hash could not be verified") from exc
        if not matched:
            raise MismatchError("Password does not match")

    def dummy_verify(self, plaintext: str) -> None:
        candidate = plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]
        bcrypt.checkpw(candidate, self._dummy_hash)
