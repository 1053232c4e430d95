"""User resource schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, validate

from motomarket.schemas.auth import PASSWORD_MAX_LENGTH, password_bytes
from motomarket.services.accounts.dto import UserUpdateIn


def _optional_text(max_length: int) -> fields.String:
    return fields.String(
        load_default="", allow_none=True, validate=validate.Length(max=max_length)
    )


class UserUpdateSchema(Schema):
    """
    Profile patch. Omitted, ``null`` and empty fields all mean "no change".
    """

    class Meta:
        unknown = EXCLUDE

    first_name = _optional_text(100)
    middle_name = _optional_text(100)
    last_name = _optional_text(100)
    surname = _optional_text(100)
    email = _optional_text(254)
    phone_number = _optional_text(32)
    picture_url = _optional_text(2048)
    password = fields.String(
        load_default="",
        allow_none=True,
        validate=[validate.Length(max=PASSWORD_MAX_LENGTH), password_bytes],
    )

    @post_load
    def to_dto(self, data: dict[str, Any], **_: Any) -> UserUpdateIn:
        return UserUpdateIn(**{key: value or "" for key, value in data.items()})


class UserSchema(Schema):
    """Public representation of a user entity (never the password)."""

    id = fields.Integer(required=True)
    first_name = fields.String(required=True)
    middle_name = fields.String(allow_none=True)
    last_name = fields.String(allow_none=True)
    surname = fields.String(allow_none=True)
    email = fields.String(required=True)
    phone_number = fields.String()
    picture_url = fields.String(allow_none=True)
    created_at = fields.DateTime(required=True)
    updated_at = fields.DateTime(required=True)
