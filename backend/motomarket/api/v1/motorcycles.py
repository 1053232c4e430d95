"""Motorcycle listing endpoints, always scoped to the caller."""

from __future__ import annotations

from flask import Blueprint

from motomarket.api.auth import require_identity
from motomarket.api.deps import json_body, json_response, listing_service, parse_page, timing
from motomarket.schemas import InsertedIdSchema, MotorcycleCreateSchema, MotorcycleSchema
from motomarket.services._shared.identity import Identity

bp = Blueprint("motorcycles", __name__)

motorcycle_create_schema = MotorcycleCreateSchema()
motorcycle_list_schema = MotorcycleSchema(many=True)
inserted_id_schema = InsertedIdSchema()


@bp.post("")
@require_identity
@timing
def create_motorcycle(*, identity: Identity):
    """Create a listing owned by the caller."""

    dto = motorcycle_create_schema.load(json_body())
    motorcycle_id = listing_service().create(identity, dto)
    return json_response(inserted_id_schema.dump({"inserted_id": motorcycle_id}), status=201)


@bp.get("")
@require_identity
@timing
def list_my_motorcycles(*, identity: Identity):
    """Return one page of the caller's listings, newest first."""

    items = listing_service().get_from_user(identity, parse_page())
    return json_response(motorcycle_list_schema.dump(items))
