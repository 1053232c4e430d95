"""User endpoints: sign-up, sign-in and profiles."""

from __future__ import annotations

from flask import Blueprint

from motomarket.api.auth import require_identity
from motomarket.api.deps import account_service, json_body, json_response, parse_page, timing
from motomarket.schemas import (
    InsertedIdSchema,
    SignInSchema,
    SignUpSchema,
    TokenResponseSchema,
    UserSchema,
    UserUpdateSchema,
)
from motomarket.services._shared.identity import Identity

bp = Blueprint("users", __name__)

sign_up_schema = SignUpSchema()
sign_in_schema = SignInSchema()
user_update_schema = UserUpdateSchema()
user_schema = UserSchema()
user_list_schema = UserSchema(many=True)
inserted_id_schema = InsertedIdSchema()
token_schema = TokenResponseSchema()


@bp.post("")
@timing
def sign_up():
    """Register a new account."""

    dto = sign_up_schema.load(json_body())
    user_id = account_service().sign_up(dto)
    return json_response(inserted_id_schema.dump({"inserted_id": user_id}), status=201)


@bp.post("/sign-in")
@timing
def sign_in():
    """Exchange email and password for a bearer token."""

    dto = sign_in_schema.load(json_body())
    token = account_service().sign_in(dto)
    return json_response(token_schema.dump({"token": token}), status=201)


@bp.get("")
@require_identity
@timing
def list_users(*, identity: Identity):
    users = account_service().list_users(parse_page())
    return json_response(user_list_schema.dump(users))


@bp.get("/me")
@require_identity
@timing
def get_me(*, identity: Identity):
    """Return the caller's own profile."""

    user = account_service().get_by_id(identity.subject_id)
    return json_response(user_schema.dump(user))


@bp.patch("/me")
@require_identity
@timing
def update_me(*, identity: Identity):
    """Apply a coalesce-on-empty update to the caller's profile."""

    dto = user_update_schema.load(json_body())
    account_service().update(identity.subject_id, dto)
    return "", 204


@bp.get("/<int:user_id>")
@require_identity
@timing
def get_user(user_id: int, *, identity: Identity):
    user = account_service().get_by_id(user_id)
    return json_response(user_schema.dump(user))
