from __future__ import annotations

from datetime import datetime, timedelta
from typing import Final, Protocol

TOKEN_LIFETIME: Final[timedelta] = timedelta(hours=24)


class TokenCodec(Protocol):
    """Port for issuing and verifying signed bearer tokens."""

    def issue(self, subject_id: int, now: datetime) -> str:
        """Return a token asserting ``subject_id``, valid for :data:`TOKEN_LIFETIME` from ``now``."""
        ...

    def verify(self, token: str, now: datetime) -> int:
        """
        Return the ``subject_id`` asserted by ``token``.

        :raises InvalidSignatureError: Signature does not match the secret.
        :raises ExpiredTokenError: ``exp`` is not after ``now``.
        :raises MalformedTokenError: Undecodable token or bad ``user_id`` claim.
        """
        ...
