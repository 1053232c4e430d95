"""HTTP API package: versioned blueprints plus the bearer-token gate."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def join_prefix(base_prefix: str, rel_prefix: str) -> str:
    """Join a version prefix and a blueprint prefix into one absolute path.

    ``join_prefix("/api/v1", "/users")`` gives ``"/api/v1/users"``; an empty
    relative prefix mounts the blueprint at the version root.
    """
    segments = [s for s in (base_prefix.strip("/"), rel_prefix.strip("/")) if s]
    return "/" + "/".join(segments)


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Register ``(blueprint, relative_prefix)`` pairs beneath ``base_prefix``."""

    for bp, rel_prefix in entries:
        app.register_blueprint(bp, url_prefix=join_prefix(base_prefix, rel_prefix))


def init_app(app: Flask) -> None:
    """Register the available API versions on the Flask app."""

    api_base = app.config.get("API_BASE_PREFIX", "/api")

    from motomarket.api.v1 import API_VERSION as V1
    from motomarket.api.v1 import REGISTRY as V1_REGISTRY

    register_blueprint_group(app, base_prefix=f"{api_base}/{V1}", entries=V1_REGISTRY)


__all__ = ["init_app", "join_prefix", "register_blueprint_group"]
