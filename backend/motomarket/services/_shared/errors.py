"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP directly. They serve as stable contracts between the units of
work, repositories, credential adapters, and application services.

The translation to HTTP responses (RFC 7807) is handled by
``motomarket/core/errors.py``.
"""

from __future__ import annotations

from dataclasses import dataclass


class ConfigurationError(Exception):
    """Raised at startup when required configuration is missing or invalid."""


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from units of work, adapters, or services.
    - The API layer translates them to problem responses.
    """

    pass


# --------------------------------------------------------------------------- #
# Authentication
# --------------------------------------------------------------------------- #


class UnauthenticatedError(ServiceError):
    """Raised when a request carries no usable bearer token."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class MalformedError(ServiceError):
    """Raised when client input cannot be parsed (e.g. a broken ``Authorization`` header)."""

    def __init__(self, message: str = "Malformed request") -> None:
        super().__init__(message)


class InvalidCredentialsError(ServiceError):
    """
    Raised when sign-in fails.

    Deliberately identical for an unknown email and a wrong password.
    """

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class TokenError(ServiceError):
    """Base class for bearer-token verification failures."""


class InvalidSignatureError(TokenError):
    """The token signature does not match the signing secret."""


class ExpiredTokenError(TokenError):
    """The token ``exp`` claim is not in the future."""


class MalformedTokenError(TokenError):
    """The token cannot be decoded or lacks a well-typed ``user_id`` claim."""


# --------------------------------------------------------------------------- #
# Credential hashing
# --------------------------------------------------------------------------- #


class HashingError(ServiceError):
    """The password hash function failed internally."""


class VerificationError(ServiceError):
    """The stored hash could not be checked (malformed hash or internal fault)."""


class MismatchError(VerificationError):
    """The plaintext does not match the stored hash."""


# --------------------------------------------------------------------------- #
# Persistence
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


@dataclass(slots=True)
class TransactionTimeoutError(ServiceError):
    """
    Raised when a unit of work exceeds its deadline.

    :param unit: Name of the unit of work (e.g. ``"users.sign_up"``).
    :param phase: ``"begin"``, ``"execute"`` or ``"commit"``.
    """

    unit: str
    phase: str

    def __str__(self) -> str:
        return f"Deadline exceeded in {self.unit} during {self.phase}"


class StorageFaultError(ServiceError):
    """
    Raised for any persistence failure that is neither a conflict nor a timeout.

    The driver exception is kept as ``__cause__``.
    """

    def __init__(self, unit: str, phase: str) -> None:
        super().__init__(f"Storage fault in {unit} during {phase}")
        self.unit = unit
        self.phase = phase
