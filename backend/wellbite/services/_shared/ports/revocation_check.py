from __future__ import annotations

from typing import Protocol

from wellbite.services.auth.dto import AccessTokenClaims


class AccessTokenRevocationCheck(Protocol):
    """
    Extension point deciding whether an otherwise valid access token was revoked.

    Methods are expected to be idempotent.
    """

    def is_revoked(self, claims: AccessTokenClaims) -> bool: ...
    def revoke(self, claims: AccessTokenClaims) -> None: ...


class NullRevocationCheck(AccessTokenRevocationCheck):
    """
    Default check: access tokens stay valid for their whole window.

    Logging out only revokes the refresh token; an access token captured
    before logout keeps working until ``exp``.
    """

    def is_revoked(self, claims: AccessTokenClaims) -> bool:
        return False

    def revoke(self, claims: AccessTokenClaims) -> None:
        return None


class InMemoryRevocationCheck(AccessTokenRevocationCheck):
    """Simple in-memory denylist keyed by ``jti``, for unit tests."""

    def __init__(self) -> None:
        self._revoked: set[str] = set()

    def is_revoked(self, claims: AccessTokenClaims) -> bool:
        return claims.token_id in self._revoked

    def revoke(self, claims: AccessTokenClaims) -> None:
        self._revoked.add(claims.token_id)
