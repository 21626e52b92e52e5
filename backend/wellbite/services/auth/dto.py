# wellbite/services/auth/dto.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any
from uuid import UUID

# Width of the ``refresh_tokens.token`` column and of the request field.
REFRESH_TOKEN_MAX_LENGTH = 128
# token_urlsafe(n) yields ceil(4n/3) characters; 96 bytes fill the column.
REFRESH_TOKEN_MAX_BYTES = REFRESH_TOKEN_MAX_LENGTH * 3 // 4
REFRESH_TOKEN_MIN_BYTES = 16

# ------------------------ Config DTO --------------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenSettings:
    """
    Token emission and verification configuration.

    Built once from the Flask config and handed to the codec and the issuer
    at construction time; nothing downstream reads ``current_app.config``.

    :param secret: HMAC signing key. Empty means signing is impossible.
    :type secret: str
    :param algorithm: JWS algorithm, ``HS256`` by default.
    :type algorithm: str
    :param issuer: Value of the ``iss`` claim.
    :type issuer: str
    :param audience: Accepted ``aud`` values; the first one is written.
    :type audience: tuple[str, ...]
    :param access_expires: Access token lifetime.
    :type access_expires: timedelta
    :param refresh_expires: Refresh token lifetime.
    :type refresh_expires: timedelta
    :param refresh_token_bytes: Entropy of generated refresh token values;
        bounded so the encoded value fits ``REFRESH_TOKEN_MAX_LENGTH``.
    :type refresh_token_bytes: int
    :param max_attempts: Attempts to find a non-colliding refresh value.
    :type max_attempts: int
    """

    secret: str
    algorithm: str = "HS256"
    issuer: str = "WellBiteAPI"
    audience: tuple[str, ...] = ("com.cxcarvaj.WellBite",)
    access_expires: timedelta = timedelta(days=2)
    refresh_expires: timedelta = timedelta(days=2)
    refresh_token_bytes: int = 32
    max_attempts: int = 3

    def __post_init__(self) -> None:
        if not REFRESH_TOKEN_MIN_BYTES <= self.refresh_token_bytes <= REFRESH_TOKEN_MAX_BYTES:
            raise ValueError(
                f"REFRESH_TOKEN_BYTES must be between {REFRESH_TOKEN_MIN_BYTES} and "
                f"{REFRESH_TOKEN_MAX_BYTES}, got {self.refresh_token_bytes}"
            )

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> TokenSettings:
        """Fold the relevant Flask config keys into a settings value."""
        raw_audience = config.get("JWT_AUDIENCE", "com.cxcarvaj.WellBite")
        if isinstance(raw_audience, str):
            audience = tuple(a.strip() for a in raw_audience.split(",") if a.strip())
        else:
            audience = tuple(raw_audience)
        return cls(
            secret=config.get("JWT_SECRET_KEY") or "",
            algorithm=config.get("JWT_ALGORITHM", "HS256"),
            issuer=config.get("JWT_ISSUER", "WellBiteAPI"),
            audience=audience,
            access_expires=timedelta(seconds=int(config.get("ACCESS_TOKEN_EXPIRES", 172800))),
            refresh_expires=timedelta(seconds=int(config.get("REFRESH_TOKEN_EXPIRES", 172800))),
            refresh_token_bytes=int(config.get("REFRESH_TOKEN_BYTES", 32)),
            max_attempts=int(config.get("REFRESH_TOKEN_MAX_ATTEMPTS", 3)),
        )


# ------------------------ Domain values ------------------------------------ #


@dataclass(frozen=True, slots=True)
class UserIdentity:
    """
    Read-only view of a user as seen by the token subsystem.

    :param id: User identifier, ``None`` when the user was never persisted.
    :type id: UUID | None
    :param email: Login email.
    :type email: str
    :param role: Role value (``admin``, ``professional``, ``client`` or ``none``).
    :type role: str
    :param full_name: Display name.
    :type full_name: str
    """

    id: UUID | None
    email: str
    role: str
    full_name: str = ""


@dataclass(frozen=True, slots=True)
class AccessTokenClaims:
    """
    Claim set carried by an access token. Never persisted.

    :param subject: ``sub``; the user id as text.
    :param expires_at: ``exp``; UTC, whole seconds.
    :param issuer: ``iss``.
    :param audience: ``aud``; always a list on the wire.
    :param token_id: ``jti``; unique per token.
    :param user_id: ``userId``.
    :param email: ``email``.
    :param role: ``role``.
    """

    subject: str
    expires_at: datetime
    issuer: str
    audience: tuple[str, ...]
    token_id: str
    user_id: UUID
    email: str
    role: str


@dataclass(frozen=True, slots=True)
class AuthenticatedUser:
    """What the request pipeline attaches to ``flask.g``."""

    identity: UserIdentity
    claims: AccessTokenClaims


# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email (normalized).
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Opaque refresh token value.
    :type refresh_token: str
    """

    refresh_token: str


@dataclass(frozen=True, slots=True)
class LogoutIn:
    """
    Input DTO for logout.

    :param refresh_token: Opaque refresh token value to revoke.
    :type refresh_token: str
    :param access_claims: Claims of the access token presented with the call.
    :type access_claims: AccessTokenClaims | None
    """

    refresh_token: str
    access_claims: AccessTokenClaims | None = None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginOut:
    """
    Output DTO for a successful login.

    :param user: The authenticated user.
    :param access_token: Signed access JWT.
    :param refresh_token: Opaque refresh token value.
    :param expires_at: Access token expiry.
    """

    user: UserIdentity
    access_token: str
    refresh_token: str
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class RefreshOut:
    """Output DTO for a refresh: a new access token and its expiry."""

    access_token: str
    expires_at: datetime
