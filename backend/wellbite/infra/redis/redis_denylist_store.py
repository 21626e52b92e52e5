from datetime import UTC, datetime
from typing import cast

import redis  # type: ignore[import-untyped]

from wellbite.services._shared.ports import AccessTokenRevocationCheck
from wellbite.services.auth.dto import AccessTokenClaims


class RedisAccessTokenDenylist(AccessTokenRevocationCheck):
    """
    Denylist for **access tokens** by jti.

    Entries expire together with the token they deny, so the keyspace never
    outgrows the set of live tokens.
    """

    def __init__(self, r: redis.Redis):
        self.r = r

    @staticmethod
    def _k(jti: str) -> str:
        return f"deny:at:{jti}"

    def is_revoked(self, claims: AccessTokenClaims) -> bool:
        return cast(int, self.r.exists(self._k(claims.token_id))) == 1

    def revoke(self, claims: AccessTokenClaims) -> None:
        now = datetime.now(UTC).timestamp()
        ttl = int(claims.expires_at.timestamp() - now)
        if ttl <= 0:
            # already dead by wall clock
            return
        self.r.set(self._k(claims.token_id), "1", ex=ttl)
