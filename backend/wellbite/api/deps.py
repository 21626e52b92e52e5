"""Shared API helpers for authentication wiring and cross-cutting concerns."""

from __future__ import annotations

import functools
import hmac
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar, cast

from flask import Flask, Response, current_app, g, jsonify, request

from wellbite.core.errors import Unauthorized
from wellbite.core.extensions import get_redis
from wellbite.infra.jwt.claims_codec import JWTClaimsCodec
from wellbite.infra.redis.redis_denylist_store import RedisAccessTokenDenylist
from wellbite.infra.sqlalchemy.refresh_token_store import SQLAlchemyRefreshTokenStore
from wellbite.infra.sqlalchemy.user_directory import SQLAlchemyUserDirectory
from wellbite.services._shared.errors import MissingTokenError
from wellbite.services._shared.ports import AccessTokenRevocationCheck, NullRevocationCheck
from wellbite.services.auth.dto import AuthenticatedUser, LoginIn, TokenSettings
from wellbite.services.auth.issuer import TokenIssuer
from wellbite.services.auth.pipeline import AuthenticationPipeline
from wellbite.services.auth.revocation import RevocationService
from wellbite.services.auth.service import AuthService
from wellbite.services.auth.verifier import TokenVerifier

F = TypeVar("F", bound=Callable[..., Any])

AUTH_EXTENSION_KEY = "wellbite.auth"
API_KEY_HEADER = "X-API-Key"


@dataclass(frozen=True, slots=True)
class AuthComponents:
    """Immutable wiring of the token subsystem, built once per app."""

    settings: TokenSettings
    pipeline: AuthenticationPipeline
    service: AuthService


def build_revocation_check(config: Mapping[str, Any]) -> AccessTokenRevocationCheck:
    """Select the access-token revocation backend named by ``ACCESS_TOKEN_DENYLIST``."""

    backend = str(config.get("ACCESS_TOKEN_DENYLIST") or "").strip().lower()
    if backend == "redis":
        return RedisAccessTokenDenylist(get_redis(str(config.get("REDIS_URL") or "")))
    if backend:
        raise RuntimeError(f"Unknown ACCESS_TOKEN_DENYLIST backend: {backend!r}")
    return NullRevocationCheck()


def build_auth_components(
    config: Mapping[str, Any],
    *,
    revocation_check: AccessTokenRevocationCheck | None = None,
) -> AuthComponents:
    """Assemble codec, store, issuer, verifier, pipeline and service from config."""

    settings = TokenSettings.from_mapping(config)
    codec = JWTClaimsCodec(settings)
    store = SQLAlchemyRefreshTokenStore()
    users = SQLAlchemyUserDirectory()
    check = revocation_check or build_revocation_check(config)

    verifier = TokenVerifier(store=store, codec=codec)
    service = AuthService(
        issuer=TokenIssuer(settings=settings, store=store),
        verifier=verifier,
        revocation=RevocationService(store=store),
        codec=codec,
        users=users,
        revocation_check=check,
    )
    pipeline = AuthenticationPipeline(verifier=verifier, revocation_check=check, users=users)
    return AuthComponents(settings=settings, pipeline=pipeline, service=service)


def init_app(app: Flask) -> None:
    """Build the auth wiring and cache it on ``app.extensions``."""

    app.extensions[AUTH_EXTENSION_KEY] = build_auth_components(app.config)


def get_auth() -> AuthComponents:
    """Return the auth wiring of the current app."""

    components = current_app.extensions.get(AUTH_EXTENSION_KEY)
    if components is None:
        components = build_auth_components(current_app.config)
        current_app.extensions[AUTH_EXTENSION_KEY] = components
    return cast(AuthComponents, components)


def current_identity() -> AuthenticatedUser:
    """Return the user attached by :func:`require_auth`."""

    user = g.get("current_user")
    if user is None:
        raise MissingTokenError()
    return cast(AuthenticatedUser, user)


def _authenticate(*, require_provisioned: bool) -> None:
    g.current_user = get_auth().pipeline.authenticate(
        request.headers.get("Authorization"), require_provisioned=require_provisioned
    )


def require_auth(func: F) -> F:
    """Ensure the request carries a valid access token for an existing user."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        _authenticate(require_provisioned=False)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_provisioned_user(func: F) -> F:
    """Like :func:`require_auth`, additionally rejecting users whose role is ``none``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        _authenticate(require_provisioned=True)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_basic_auth(func: F) -> F:
    """Require HTTP Basic credentials; exposes them as ``g.login_credentials``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        auth = request.authorization
        if auth is None or auth.type != "basic" or not auth.username or not auth.password:
            raise MissingTokenError()
        g.login_credentials = LoginIn(email=auth.username, password=auth.password)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_api_key(func: F) -> F:
    """Require the ``X-API-Key`` header to match the configured ``API_KEY``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        expected = str(current_app.config.get("API_KEY") or "")
        provided = request.headers.get(API_KEY_HEADER, "")
        if not expected or not hmac.compare_digest(provided.encode(), expected.encode()):
            raise Unauthorized()
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
