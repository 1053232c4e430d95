"""Assertion helpers shared by the hasher and codec tests."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager


@contextmanager
def not_raises(*unexpected: type[BaseException]) -> Iterator[None]:
    """Fail the test, with the original error chained, if the block raises any of ``unexpected``."""
    try:
        yield
    except unexpected as exc:  # pragma: no cover
        raise AssertionError(f"unexpected {type(exc).__name__}: {exc}") from exc
