"""JSON logging with per-request correlation ids.

Every record leaves the process as one JSON object on stdout. Inside a
request the object carries the ``request_id`` (taken from ``X-Request-ID`` /
``X-Correlation-ID`` or generated), which is also echoed on the response.
Call sites attach context with ``extra={...}``; only the keys listed in
:data:`EXTRA_KEYS` are emitted, so arbitrary attributes (and anything that
might hold a secret) never reach the output.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO
from uuid import uuid4

from flask import Flask, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")

#: ``extra`` keys copied into the JSON payload.
EXTRA_KEYS = (
    "endpoint",
    "elapsed_ms",
    "unit",
    "phase",
    "subject_id",
    "status",
    "code",
    "method",
    "path",
)


class JSONFormatter(logging.Formatter):
    """Render a record as a single-line JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        payload.update({key: getattr(record, key) for key in EXTRA_KEYS if hasattr(record, key)})
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class RequestIdFilter(logging.Filter):
    """Stamp ``request_id`` on every record (``None`` outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = ensure_request_id() if has_request_context() else None
        return True


def ensure_request_id() -> str:
    """
    Return the id correlating the current request.

    The first call in a request adopts an incoming correlation header or
    generates a UUID4 and pins it on ``flask.g``; outside a request every
    call returns a fresh UUID4.
    """
    if not has_request_context():
        return str(uuid4())
    if "request_id" not in g:
        incoming = next(
            (request.headers[h] for h in CORRELATION_HEADERS if request.headers.get(h)),
            None,
        )
        g.request_id = incoming or str(uuid4())
    return g.request_id  # type: ignore[no-any-return]


def _level_value(level: str | int) -> int | str:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else level.upper()


def configure_logging(level: str | int = "INFO", *, stream: TextIO | None = None) -> None:
    """Replace the root handlers with one JSON handler writing to ``stream`` (stdout)."""

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestIdFilter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_level_value(level))


def init_app(app: Flask) -> None:
    """Pin a request id at the start of each request and echo it on the response."""

    app.logger.addFilter(RequestIdFilter())

    @app.before_request
    def _seed_request_id() -> None:
        ensure_request_id()

    @app.after_request
    def _inject_response_header(response):
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        app.logger.debug(
            "request.completed",
            extra={"method": request.method, "path": request.path, "status": response.status_code},
        )
        return response


__all__ = ["configure_logging", "init_app", "ensure_request_id", "JSONFormatter"]
