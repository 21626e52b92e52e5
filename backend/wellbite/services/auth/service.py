# wellbite/services/auth/service.py
from __future__ import annotations

import logging

from wellbite.services._shared.base import BaseService
from wellbite.services._shared.errors import (
    InvalidCredentialsError,
    UnprovisionedUserError,
    UserNotFoundError,
)
from wellbite.services._shared.policies.common import is_provisioned
from wellbite.services._shared.ports import (
    AccessTokenRevocationCheck,
    ClaimsCodec,
    NullRevocationCheck,
    UserDirectory,
)
from wellbite.services.auth.dto import (
    LoginIn,
    LoginOut,
    LogoutIn,
    RefreshIn,
    RefreshOut,
)
from wellbite.services.auth.issuer import TokenIssuer
from wellbite.services.auth.revocation import RevocationService
from wellbite.services.auth.verifier import TokenVerifier

log = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Authentication lifecycle service (login / refresh / logout).

    Access tokens are stateless JWTs signed by a :class:`ClaimsCodec`; refresh
    tokens are opaque values persisted through the issuer's store and revoked
    on logout.
    """

    def __init__(
        self,
        *,
        issuer: TokenIssuer,
        verifier: TokenVerifier,
        revocation: RevocationService,
        codec: ClaimsCodec,
        users: UserDirectory,
        revocation_check: AccessTokenRevocationCheck | None = None,
    ) -> None:
        """
        Initialize the service with its collaborators.

        :param issuer: Builds claims and persists refresh tokens.
        :param verifier: Validates presented refresh tokens.
        :param revocation: Revokes refresh tokens.
        :param codec: Signs access-token claims.
        :param users: Credential checks and lookups by id.
        :param revocation_check: Access-token revocation hook (no-op default).
        """
        super().__init__()
        self.issuer = issuer
        self.verifier = verifier
        self.revocation = revocation
        self.codec = codec
        self.users = users
        self.revocation_check = revocation_check or NullRevocationCheck()

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Authenticate credentials and issue an access/refresh pair.

        :raises InvalidCredentialsError: Unknown email or wrong password.
        :raises UnprovisionedUserError: The user holds the ``none`` role;
            nothing is persisted in that case.
        """
        user = self.users.authenticate(dto.email, dto.password)
        if user is None:
            raise InvalidCredentialsError()
        if not is_provisioned(user.role):
            raise UnprovisionedUserError()

        claims, record = self.issuer.issue_pair(user)
        access = self.codec.sign(claims)
        return LoginOut(
            user=user,
            access_token=access,
            refresh_token=record.token,
            expires_at=claims.expires_at,
        )

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> RefreshOut:
        """
        Exchange a valid refresh token for a new access token.

        The refresh token itself is not rotated; it stays usable until it
        expires or is revoked.
        """
        _, owner_id = self.verifier.verify_refresh_token(dto.refresh_token)
        user = self.users.get_by_id(owner_id)
        if user is None:
            raise UserNotFoundError()

        claims = self.issuer.issue_access_token(user)
        log.info("Access token refreshed", extra={"user_id": str(owner_id)})
        return RefreshOut(access_token=self.codec.sign(claims), expires_at=claims.expires_at)

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, dto: LogoutIn) -> None:
        """
        Revoke the refresh token, then hand the presenting access token to the
        revocation hook.
        """
        self.revocation.revoke(dto.refresh_token)
        if dto.access_claims is not None:
            self.revocation_check.revoke(dto.access_claims)
