# wellbite/infra/jwt/claims_codec.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

import jwt

from wellbite.services._shared.errors import (
    ExpiredTokenError,
    InvalidAudienceError,
    InvalidIssuerError,
    MalformedTokenError,
    SignatureInvalidError,
    SigningError,
)
from wellbite.services._shared.ports import ClaimsCodec
from wellbite.services.auth.dto import AccessTokenClaims, TokenSettings

REQUIRED_CLAIMS = ("sub", "exp", "iss", "aud", "jti")


@dataclass(slots=True)
class JWTClaimsCodec(ClaimsCodec):
    """
    Adapter signing access tokens with PyJWT.

    .. note::
       Key, algorithm, issuer and audience come from the ``TokenSettings``
       given at construction; no Flask app context is needed.
    """

    settings: TokenSettings

    def sign(self, claims: AccessTokenClaims) -> str:
        if not self.settings.secret:
            raise SigningError("JWT signing key is not configured")
        payload: dict[str, Any] = {
            "sub": claims.subject,
            "exp": int(claims.expires_at.timestamp()),
            "iss": claims.issuer,
            "aud": list(claims.audience),
            "jti": claims.token_id,
            "userId": str(claims.user_id),
            "email": claims.email,
            "role": claims.role,
        }
        try:
            return jwt.encode(payload, self.settings.secret, algorithm=self.settings.algorithm)
        except (jwt.PyJWTError, NotImplementedError, TypeError) as exc:
            raise SigningError(str(exc)) from exc

    def verify(self, token: str) -> AccessTokenClaims:
        if not self.settings.secret:
            raise SigningError("JWT signing key is not configured")
        try:
            decoded = jwt.decode(
                token,
                self.settings.secret,
                algorithms=[self.settings.algorithm],
                audience=list(self.settings.audience),
                issuer=self.settings.issuer,
                options={"require": list(REQUIRED_CLAIMS)},
            )
        except jwt.ExpiredSignatureError as exc:
            raise ExpiredTokenError() from exc
        except jwt.InvalidAudienceError as exc:
            raise InvalidAudienceError() from exc
        except jwt.InvalidIssuerError as exc:
            raise InvalidIssuerError() from exc
        except jwt.InvalidSignatureError as exc:
            raise SignatureInvalidError() from exc
        except jwt.InvalidTokenError as exc:
            # DecodeError, MissingRequiredClaimError, ImmatureSignatureError, ...
            raise MalformedTokenError(str(exc)) from exc
        except jwt.PyJWTError as exc:
            # InvalidKeyError and friends: the token cannot be trusted either way
            raise MalformedTokenError(str(exc)) from exc
        return self._to_claims(decoded)

    @staticmethod
    def _to_claims(decoded: dict[str, Any]) -> AccessTokenClaims:
        aud = decoded["aud"]
        try:
            return AccessTokenClaims(
                subject=str(decoded["sub"]),
                expires_at=datetime.fromtimestamp(int(decoded["exp"]), tz=UTC),
                issuer=str(decoded["iss"]),
                audience=(aud,) if isinstance(aud, str) else tuple(aud),
                token_id=str(decoded["jti"]),
                user_id=UUID(str(decoded["userId"])),
                email=str(decoded["email"]),
                role=str(decoded["role"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise MalformedTokenError(f"Unusable claim set: {exc}") from exc
