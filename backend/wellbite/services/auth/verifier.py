# wellbite/services/auth/verifier.py
from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from uuid import UUID

from wellbite.services._shared.errors import (
    ExpiredTokenError,
    TokenNotFoundError,
    TokenRevokedError,
)
from wellbite.services._shared.ports import ClaimsCodec, RefreshTokenRecord, RefreshTokenStore
from wellbite.services.auth.dto import AccessTokenClaims


class TokenVerifier:
    """Validate refresh tokens against the store and access tokens against the codec."""

    def __init__(
        self,
        *,
        store: RefreshTokenStore,
        codec: ClaimsCodec,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self.store = store
        self.codec = codec
        self._clock = clock

    def verify_refresh_token(self, value: str) -> tuple[RefreshTokenRecord, UUID]:
        """
        Resolve a refresh token value to its record and owner.

        Revocation is checked before expiry, so a revoked token that also
        expired reports as revoked.

        :raises TokenNotFoundError: Unknown value.
        :raises TokenRevokedError: The token was revoked.
        :raises ExpiredTokenError: The token is past ``expires_at``.
        """
        record = self.store.find_by_value(value)
        if record is None:
            raise TokenNotFoundError()
        if record.revoked:
            raise TokenRevokedError()
        if record.is_expired(self._clock()):
            raise ExpiredTokenError()
        return record, record.user_id

    def verify_access_token(self, token: str) -> AccessTokenClaims:
        return self.codec.verify(token)
