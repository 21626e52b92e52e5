# wellbite/services/auth/issuer.py
from __future__ import annotations

import logging
import secrets
from collections.abc import Callable
from datetime import UTC, datetime
from uuid import UUID, uuid4

from wellbite.services._shared.errors import ConflictError, IdentityMissingError
from wellbite.services._shared.ports import RefreshTokenRecord, RefreshTokenStore
from wellbite.services.auth.dto import AccessTokenClaims, TokenSettings, UserIdentity

log = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TokenIssuer:
    """
    Build access-token claims and persist refresh tokens for a user.

    The issuer never signs; turning claims into a JWT is the codec's job.
    """

    def __init__(
        self,
        *,
        settings: TokenSettings,
        store: RefreshTokenStore,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.settings = settings
        self.store = store
        self._clock = clock

    def _now(self) -> datetime:
        # whole seconds so a claim set survives a JWT round trip unchanged
        return self._clock().astimezone(UTC).replace(microsecond=0)

    @staticmethod
    def _require_id(user: UserIdentity) -> UUID:
        if user.id is None:
            raise IdentityMissingError()
        return user.id

    def issue_access_token(self, user: UserIdentity) -> AccessTokenClaims:
        """
        Build a fresh claim set for ``user``.

        :raises IdentityMissingError: If the user has no identifier.
        """
        user_id = self._require_id(user)
        return AccessTokenClaims(
            subject=str(user_id),
            expires_at=self._now() + self.settings.access_expires,
            issuer=self.settings.issuer,
            audience=self.settings.audience,
            token_id=str(uuid4()),
            user_id=user_id,
            email=user.email,
            role=user.role,
        )

    def issue_pair(self, user: UserIdentity) -> tuple[AccessTokenClaims, RefreshTokenRecord]:
        """
        Build access claims and persist a new refresh token.

        A colliding refresh value is regenerated up to ``max_attempts`` times.

        :raises IdentityMissingError: If the user has no identifier.
        :raises ConflictError: If every attempt collided.
        """
        user_id = self._require_id(user)
        claims = self.issue_access_token(user)
        expires_at = self._now() + self.settings.refresh_expires

        attempts = max(1, self.settings.max_attempts)
        for attempt in range(1, attempts + 1):
            value = secrets.token_urlsafe(self.settings.refresh_token_bytes)
            try:
                record = self.store.create(user_id=user_id, token=value, expires_at=expires_at)
            except ConflictError:
                log.warning(
                    "Refresh token value collided (attempt %s/%s)",
                    attempt,
                    attempts,
                    extra={"user_id": str(user_id), "attempt": attempt},
                )
                if attempt == attempts:
                    raise
                continue
            log.info(
                "Issued token pair",
                extra={"user_id": str(user_id), "token_id": claims.token_id},
            )
            return claims, record
        raise AssertionError("unreachable")  # pragma: no cover
