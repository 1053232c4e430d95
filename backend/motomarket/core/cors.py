"""CORS configuration helper for API resources."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from motomarket.core.logger import REQUEST_ID_HEADER

# Browsers must be allowed to send bearer tokens and read the auth challenge.
ALLOW_HEADERS = ("Authorization", "Content-Type", REQUEST_ID_HEADER)
EXPOSE_HEADERS = ("WWW-Authenticate", REQUEST_ID_HEADER)


def init_app(app: Flask) -> None:
    """Configure CORS for ``/api/*`` from ``CORS_ORIGINS``.

    A blank value or ``"*"`` allows any origin. Credentials are never
    enabled because authentication travels in the ``Authorization`` header,
    not in cookies.
    """
    raw_origins = app.config.get("CORS_ORIGINS", "")
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    wildcard = len(origins) == 0 or origins == ["*"]

    CORS(
        app,
        resources={r"/api/*": {"origins": "*" if wildcard else origins}},
        allow_headers=list(ALLOW_HEADERS),
        expose_headers=list(EXPOSE_HEADERS),
        supports_credentials=False,
        # flask-cors echoes the request Origin unless told to send "*".
        send_wildcard=wildcard,
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
