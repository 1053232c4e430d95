"""Common Marshmallow schemas shared across resources."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load


class PageQuerySchema(Schema):
    """Parse the 1-based ``page`` query parameter; values below 1 become 1."""

    class Meta:
        unknown = EXCLUDE

    page = fields.Integer(load_default=1)

    @post_load
    def clamp_page(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        data["page"] = max(int(data.get("page") or 1), 1)
        return data


class InsertedIdSchema(Schema):
    """Response payload for a created resource."""

    inserted_id = fields.Integer(required=True)
