"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, ValidationError, fields, post_load, validate

from motomarket.services.accounts.dto import CredentialsIn, UserCreationIn

# bcrypt only reads the first 72 bytes of a password.
PASSWORD_MAX_LENGTH = 72


def password_bytes(value: str) -> None:
    """Reject passwords whose UTF-8 encoding exceeds what bcrypt accepts."""
    if len(value.encode("utf-8")) > PASSWORD_MAX_LENGTH:
        raise ValidationError(f"Longer than {PASSWORD_MAX_LENGTH} bytes.")


class SignUpSchema(Schema):
    """Input payload for account registration."""

    class Meta:
        unknown = EXCLUDE

    first_name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    middle_name = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=100))
    last_name = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=100))
    surname = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=100))
    email = fields.String(required=True, validate=validate.Length(min=1, max=254))
    phone_number = fields.String(load_default="", validate=validate.Length(max=32))
    password = fields.String(
        required=True, validate=[validate.Length(min=1), password_bytes]
    )

    @post_load
    def to_dto(self, data: dict[str, Any], **_: Any) -> UserCreationIn:
        return UserCreationIn(**data)


class SignInSchema(Schema):
    """Input payload for authenticating a user."""

    class Meta:
        unknown = EXCLUDE

    email = fields.String(required=True, validate=validate.Length(min=1, max=254))
    password = fields.String(required=True, validate=validate.Length(min=1))

    @post_load
    def to_dto(self, data: dict[str, Any], **_: Any) -> CredentialsIn:
        return CredentialsIn(**data)


class TokenResponseSchema(Schema):
    """Response payload containing a bearer token."""

    token = fields.String(required=True)
