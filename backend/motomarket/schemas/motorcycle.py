"""Motorcycle listing schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, validate

from motomarket.services.listings.dto import MotorcycleCreationIn


class MotorcycleCreateSchema(Schema):
    """
    Payload for a new listing.

    Unknown keys are dropped, so an ``owner_id`` sent by the client never
    reaches the service.
    """

    class Meta:
        unknown = EXCLUDE

    post_title = fields.String(required=True, validate=validate.Length(min=1, max=200))
    price = fields.Float(required=True, validate=validate.Range(min=0))
    type = fields.String(load_default="", validate=validate.Length(max=50))
    mileage = fields.Integer(load_default=0, validate=validate.Range(min=0))
    brand = fields.String(load_default="", validate=validate.Length(max=100))
    model = fields.String(load_default="", validate=validate.Length(max=100))
    year = fields.Integer(required=True, validate=validate.Range(min=1885, max=9999))
    engine = fields.String(load_default="", validate=validate.Length(max=100))
    color = fields.String(load_default="", validate=validate.Length(max=50))
    description = fields.String(load_default="")
    location = fields.String(load_default="", validate=validate.Length(max=200))
    image_urls = fields.List(
        fields.String(validate=validate.Length(min=1, max=2048)), load_default=list
    )

    @post_load
    def to_dto(self, data: dict[str, Any], **_: Any) -> MotorcycleCreationIn:
        data["image_urls"] = tuple(data.get("image_urls") or ())
        return MotorcycleCreationIn(**data)


class MotorcycleImageSchema(Schema):
    id = fields.Integer(required=True)
    url = fields.String(required=True)
    created_at = fields.DateTime(required=True)
    updated_at = fields.DateTime(required=True)


class MotorcycleSchema(Schema):
    """Listing as returned to its owner."""

    id = fields.Integer(required=True)
    owner_id = fields.Integer(required=True)
    post_title = fields.String(required=True)
    price = fields.Float(required=True)
    type = fields.String()
    mileage = fields.Integer()
    brand = fields.String()
    model = fields.String()
    year = fields.Integer(required=True)
    engine = fields.String()
    color = fields.String()
    description = fields.String()
    location = fields.String()
    images = fields.List(fields.Nested(MotorcycleImageSchema))
    created_at = fields.DateTime(required=True)
    updated_at = fields.DateTime(required=True)
