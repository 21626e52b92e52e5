"""Authentication helpers for tests."""

from __future__ import annotations

import base64
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

from wellbite.infra.jwt.claims_codec import JWTClaimsCodec
from wellbite.services.auth.dto import AccessTokenClaims, TokenSettings, UserIdentity


def basic_auth_header(email: str, password: str) -> dict[str, str]:
    """Return an HTTP Basic ``Authorization`` header."""

    raw = base64.b64encode(f"{email}:{password}".encode()).decode()
    return {"Authorization": f"Basic {raw}"}


def bearer_header(token: str) -> dict[str, str]:
    """Return a bearer ``Authorization`` header."""

    return {"Authorization": f"Bearer {token}"}


def make_claims(
    settings: TokenSettings,
    *,
    user_id: UUID | None = None,
    email: str = "someone@example.com",
    role: str = "client",
    expires_in: timedelta | None = None,
) -> AccessTokenClaims:
    """Build a claim set the way the issuer does, with an adjustable expiry.

    Parameters
    ----------
    settings:
        Token settings providing issuer, audience and the default window.
    expires_in:
        Offset from now; negative values produce an already expired token.
    """

    uid = user_id or uuid4()
    now = datetime.now(UTC).replace(microsecond=0)
    return AccessTokenClaims(
        subject=str(uid),
        expires_at=now + (expires_in if expires_in is not None else settings.access_expires),
        issuer=settings.issuer,
        audience=settings.audience,
        token_id=str(uuid4()),
        user_id=uid,
        email=email,
        role=role,
    )


def issue_token(settings: TokenSettings, user, expires_in: timedelta | None = None) -> str:
    """Sign an access token for ``user`` (an ORM user or a ``UserIdentity``)."""

    role = getattr(user.role, "value", user.role)
    claims = make_claims(
        settings, user_id=user.id, email=user.email, role=role, expires_in=expires_in
    )
    return JWTClaimsCodec(settings).sign(claims)


def identity(user_id: UUID | None = None, *, role: str = "client", email: str = "") -> UserIdentity:
    """Return a ``UserIdentity`` with sensible defaults."""

    uid = user_id or uuid4()
    return UserIdentity(
        id=uid,
        email=email or f"{uid.hex[:8]}@example.com",
        role=role,
        full_name="Test User",
    )
