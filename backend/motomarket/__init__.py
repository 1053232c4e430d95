"""Motorcycle marketplace backend.

Provide convenient access to :func:`motomarket.factory.create_app` so callers
can ``from motomarket import create_app`` without traversing the package.
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
