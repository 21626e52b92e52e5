"""Authentication endpoints: login, refresh and logout."""

from __future__ import annotations

from flask import Blueprint, g, request

from wellbite.api.deps import (
    current_identity,
    get_auth,
    json_response,
    require_basic_auth,
    require_provisioned_user,
    timing,
)
from wellbite.schemas import (
    LoginResponseSchema,
    LogoutRequestSchema,
    RefreshRequestSchema,
    RefreshResponseSchema,
)
from wellbite.services.auth.dto import LogoutIn, RefreshIn

bp = Blueprint("auth", __name__, url_prefix="/auth")

login_response_schema = LoginResponseSchema()
refresh_request_schema = RefreshRequestSchema()
refresh_response_schema = RefreshResponseSchema()
logout_request_schema = LogoutRequestSchema()


@bp.post("/login")
@require_basic_auth
@timing
def login():
    """Authenticate HTTP Basic credentials and issue an access/refresh pair."""

    result = get_auth().service.login(g.login_credentials)
    return json_response(login_response_schema.dump(result))


@bp.post("/refresh")
@require_provisioned_user
@timing
def refresh():
    """Exchange a refresh token for a new access token."""

    data = refresh_request_schema.load(request.get_json(silent=True) or {})
    result = get_auth().service.refresh(RefreshIn(refresh_token=data["refresh_token"]))
    return json_response(refresh_response_schema.dump(result))


@bp.get("/logout")
@require_provisioned_user
@timing
def logout():
    """Revoke the given refresh token (query string or JSON body)."""

    raw = dict(request.get_json(silent=True) or {})
    raw.update(request.args.to_dict())
    data = logout_request_schema.load(raw)
    get_auth().service.logout(
        LogoutIn(refresh_token=data["refresh_token"], access_claims=current_identity().claims)
    )
    return "", 200
