"""Bearer-token gate for protected views.

:func:`resolve_identity` is the per-request state machine; it is plain Python
so it can run without a request. :func:`require_identity` runs it
against the current request and hands the result to the view as the
``identity`` keyword argument. Nothing is stored on ``flask.g``.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, TypeVar

from flask import request

from motomarket.core.extensions import get_token_codec
from motomarket.services._shared.errors import (
    MalformedError,
    TokenError,
    UnauthenticatedError,
)
from motomarket.services._shared.identity import Identity
from motomarket.services._shared.ports import TokenCodec

log = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

BEARER_SCHEME = "bearer"


def parse_bearer(header: str) -> str:
    """
    Extract the token from an ``Authorization: Bearer <token>`` value.

    The scheme is matched case-insensitively; anything other than exactly
    two space-separated parts is rejected.

    :raises MalformedError: If the header does not have the bearer shape.
    """
    parts = header.split()
    if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME:
        raise MalformedError("Authorization header must be 'Bearer <token>'")
    return parts[1]


def resolve_identity(authorization: str | None, codec: TokenCodec, now: datetime) -> Identity:
    """
    Turn the raw ``Authorization`` header into an :class:`Identity`.

    1. Missing (or empty) header: :class:`UnauthenticatedError`.
    2. Not ``Bearer <token>``: :class:`MalformedError`.
    3. Token rejected by ``codec``: :class:`UnauthenticatedError`, chained
       to the specific :class:`TokenError`.
    4. Otherwise the identity carried by the token.
    """
    if not authorization or not authorization.strip():
        raise UnauthenticatedError()

    token = parse_bearer(authorization)
    try:
        subject_id = codec.verify(token, now)
    except TokenError as exc:
        log.info("bearer token rejected: %s", type(exc).__name__, extra={"code": "unauthorized"})
        raise UnauthenticatedError() from exc
    return Identity(subject_id=subject_id)


def require_identity(func: F) -> F:
    """Run the bearer gate and pass ``identity=`` to the wrapped view."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        identity = resolve_identity(
            request.headers.get("Authorization"),
            get_token_codec(),
            datetime.now(UTC),
        )
        return func(*args, identity=identity, **kwargs)

    return wrapper  # type: ignore[return-value]


__all__ = ["parse_bearer", "require_identity", "resolve_identity"]
