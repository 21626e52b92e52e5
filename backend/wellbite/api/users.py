"""User endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from wellbite.api.deps import (
    current_identity,
    json_response,
    require_api_key,
    require_auth,
    timing,
)
from wellbite.schemas import UserCreateSchema, UserSchema
from wellbite.services.users.dto import UserCreateIn
from wellbite.services.users.service import UserService

bp = Blueprint("users", __name__, url_prefix="/users")

user_schema = UserSchema()
user_create_schema = UserCreateSchema()


@bp.post("")
@require_api_key
@timing
def create_user():
    """Create a new user; guarded by the shared API key."""

    payload = user_create_schema.load(request.get_json(silent=True) or {})
    user = UserService().create_user(UserCreateIn(**payload))
    return json_response({"user": user_schema.dump(user)}, status=201)


@bp.get("/me")
@require_auth
@timing
def me():
    """Return the authenticated user."""

    return json_response({"user": user_schema.dump(current_identity().identity)})
