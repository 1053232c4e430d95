"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request

from motomarket.core.extensions import get_password_hasher, get_token_codec
from motomarket.schemas.common import PageQuerySchema
from motomarket.services.accounts.service import AccountService
from motomarket.services.listings.service import ListingService

F = TypeVar("F", bound=Callable[..., Any])

_page_query_schema = PageQuerySchema()


def parse_page() -> int:
    """Return the ``page`` query parameter, clamped to ``>= 1``."""

    return int(_page_query_schema.load(request.args)["page"])


def json_body() -> dict[str, Any]:
    """Return the request JSON object (``{}`` when absent or not an object)."""

    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def account_service() -> AccountService:
    """Build an :class:`AccountService` bound to this app's credential adapters."""

    return AccountService(hasher=get_password_hasher(), codec=get_token_codec())


def listing_service() -> ListingService:
    return ListingService()


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request.endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
