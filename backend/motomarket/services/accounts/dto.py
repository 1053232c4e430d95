"""
DTOs for AccountService.

Data Transfer Objects (DTOs) isolate the service layer from ORM models,
ensuring clear input/output contracts and type safety.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserCreationIn:
    """
    Input DTO for sign-up.

    Text fields are trimmed by the service; empty optional names become ``NULL``.

    :param first_name: Given name.
    :type first_name: str
    :param email: Login email (case-sensitive).
    :type email: str
    :param password: Raw password, hashed before storage.
    :type password: str
    """

    first_name: str
    email: str
    password: str
    middle_name: str | None = None
    last_name: str | None = None
    surname: str | None = None
    phone_number: str = ""


@dataclass(frozen=True, slots=True)
class CredentialsIn:
    """
    Input DTO for sign-in.

    :param email: Login email.
    :type email: str
    :param password: Raw password.
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class UserUpdateIn:
    """
    Input DTO for a profile update.

    Every field defaults to ``""``, which means "leave unchanged".
    """

    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""
    surname: str = ""
    email: str = ""
    phone_number: str = ""
    picture_url: str = ""
    password: str = ""


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserOut:
    """
    Public profile of a user. The password hash is never part of it.
    """

    id: int
    first_name: str
    middle_name: str | None
    last_name: str | None
    surname: str | None
    email: str
    phone_number: str
    picture_url: str | None
    created_at: datetime
    updated_at: datetime
