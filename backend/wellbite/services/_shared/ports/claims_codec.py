from __future__ import annotations

from typing import Protocol

from wellbite.services.auth.dto import AccessTokenClaims


class ClaimsCodec(Protocol):
    """
    Port for signing and verifying access-token claim sets.

    Implementations hold their key, algorithm, issuer and audience from
    construction; they never read ambient configuration.
    """

    def sign(self, claims: AccessTokenClaims) -> str:
        """Serialize and sign ``claims``. :raises SigningError: on failure."""
        ...

    def verify(self, token: str) -> AccessTokenClaims:
        """
        Verify signature, expiry, audience and issuer, then decode.

        :raises AuthenticationError: A subclass naming the failed check.
        """
        ...
