from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Identity:
    """
    The authenticated caller of a request.

    Produced only by the auth gate after a token verifies, then passed
    explicitly to views and services. Ownership-scoped operations take their
    owner id from here, never from the request body.

    :param subject_id: Primary key of the authenticated ``User``.
    :type subject_id: int
    """

    subject_id: int
