# motomarket/infra/jwt/jwt_token_codec.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, Final

import jwt

from motomarket.services._shared.errors import (
    ConfigurationError,
    ExpiredTokenError,
    InvalidSignatureError,
    MalformedTokenError,
)
from motomarket.services._shared.ports import TOKEN_LIFETIME, TokenCodec

log = logging.getLogger(__name__)

TOKEN_ISSUER: Final[str] = "noda"
TOKEN_SUBJECT: Final[str] = "authentication"
SUBJECT_ID_CLAIM: Final[str] = "user_id"

_EPOCH: Final[datetime] = datetime(1970, 1, 1, tzinfo=UTC)
_MICROS_PER_SECOND: Final[int] = 1_000_000


def _epoch_micros(moment: datetime) -> int:
    """Return exact UNIX microseconds for ``moment`` (naive values are taken as UTC)."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return (moment - _EPOCH) // timedelta(microseconds=1)


def _numeric_date(micros: int) -> int | float:
    """Encode as a JWT NumericDate; fractional seconds are kept rather than truncated."""
    seconds, rest = divmod(micros, _MICROS_PER_SECOND)
    return seconds if rest == 0 else micros / _MICROS_PER_SECOND


@dataclass(slots=True, frozen=True)
class JWTTokenCodec(TokenCodec):
    """
    Adapter for PyJWT using a symmetric secret.

    The secret is injected at construction; nothing is read from the
    environment here.

    :param secret: Shared HMAC secret. Must be non-empty.
    :param algorithm: The only algorithm accepted on verification.
    :param lifetime: Validity window of issued tokens.
    """

    secret: str
    algorithm: str = "HS256"
    lifetime: timedelta = TOKEN_LIFETIME

    def __post_init__(self) -> None:
        if not self.secret:
            raise ConfigurationError("Token signing secret must not be empty.")

    def issue(self, subject_id: int, now: datetime) -> str:
        issued_at = _epoch_micros(now)
        expires_at = issued_at + self.lifetime // timedelta(microseconds=1)
        claims: dict[str, Any] = {
            "iss": TOKEN_ISSUER,
            "sub": TOKEN_SUBJECT,
            "iat": _numeric_date(issued_at),
            "exp": _numeric_date(expires_at),
            SUBJECT_ID_CLAIM: subject_id,
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str, now: datetime) -> int:
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                issuer=TOKEN_ISSUER,
                # Expiry is checked below against the caller's clock.
                options={
                    "require": ["iss", "sub", "iat", "exp"],
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                },
            )
        except jwt.InvalidAlgorithmError as exc:
            log.info("token rejected: unexpected algorithm (%s)", exc)
            raise InvalidSignatureError("Token algorithm not accepted") from exc
        except jwt.InvalidSignatureError as exc:
            raise InvalidSignatureError("Token signature mismatch") from exc
        except jwt.InvalidTokenError as exc:
            raise MalformedTokenError(f"Token could not be decoded: {exc}") from exc

        if claims.get("sub") != TOKEN_SUBJECT:
            raise MalformedTokenError("Token subject claim is not recognized")

        exp = claims["exp"]
        if not isinstance(exp, int | float) or isinstance(exp, bool) or not math.isfinite(exp):
            raise MalformedTokenError("Token exp claim is not a finite number")
        if _epoch_micros(now) >= round(exp * _MICROS_PER_SECOND):
            raise ExpiredTokenError("Token has expired")

        subject_id = claims.get(SUBJECT_ID_CLAIM)
        if not isinstance(subject_id, int) or isinstance(subject_id, bool):
            raise MalformedTokenError("Token user_id claim is missing or not an integer")
        return subject_id
