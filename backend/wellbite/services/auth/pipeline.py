# wellbite/services/auth/pipeline.py
"""
Per-request authentication chain.

The pipeline walks a request through the states of :class:`AuthState` and
either returns an :class:`AuthenticatedUser` or raises the
:class:`~wellbite.services._shared.errors.AuthenticationError` subclass of the
step that failed. It knows nothing about Flask; ``wellbite.api.deps`` feeds it
the raw ``Authorization`` header and stores the result on ``flask.g``.
"""

from __future__ import annotations

import enum
import logging

from wellbite.services._shared.errors import (
    AuthenticationError,
    MissingTokenError,
    TokenRevokedError,
    UnprovisionedUserError,
    UserNotFoundError,
)
from wellbite.services._shared.policies.common import is_provisioned
from wellbite.services._shared.ports import AccessTokenRevocationCheck, UserDirectory
from wellbite.services.auth.dto import AuthenticatedUser
from wellbite.services.auth.verifier import TokenVerifier

log = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


class AuthState(enum.Enum):
    """How far a request got through the pipeline."""

    NO_TOKEN = "no_token"
    TOKEN_PRESENT = "token_present"
    SIGNATURE_AND_CLAIMS_VALID = "signature_and_claims_valid"
    REVOCATION_CHECKED = "revocation_checked"
    USER_RESOLVED = "user_resolved"
    AUTHENTICATED = "authenticated"


def extract_bearer(authorization: str | None) -> str | None:
    """Return the credential of a ``Bearer`` authorization header, if any."""
    if not authorization:
        return None
    if not authorization[: len(BEARER_PREFIX)].lower() == BEARER_PREFIX:
        return None
    token = authorization[len(BEARER_PREFIX) :].strip()
    return token or None


class AuthenticationPipeline:
    """Authenticate one request from its ``Authorization`` header."""

    def __init__(
        self,
        *,
        verifier: TokenVerifier,
        revocation_check: AccessTokenRevocationCheck,
        users: UserDirectory,
    ) -> None:
        self.verifier = verifier
        self.revocation_check = revocation_check
        self.users = users

    def authenticate(
        self, authorization: str | None, *, require_provisioned: bool = False
    ) -> AuthenticatedUser:
        """
        Run every step of the chain.

        :param authorization: Raw ``Authorization`` header value.
        :param require_provisioned: Reject users whose role is ``none``.
        :raises AuthenticationError: From the first failing step.
        """
        state = AuthState.NO_TOKEN
        try:
            token = extract_bearer(authorization)
            if token is None:
                raise MissingTokenError()
            state = AuthState.TOKEN_PRESENT

            claims = self.verifier.verify_access_token(token)
            state = AuthState.SIGNATURE_AND_CLAIMS_VALID

            if self.revocation_check.is_revoked(claims):
                raise TokenRevokedError()
            state = AuthState.REVOCATION_CHECKED

            identity = self.users.get_by_id(claims.user_id)
            if identity is None:
                raise UserNotFoundError()
            state = AuthState.USER_RESOLVED

            if require_provisioned and not is_provisioned(identity.role):
                raise UnprovisionedUserError()
        except AuthenticationError as exc:
            log.warning(
                "Request authentication failed at %s: %s",
                state.value,
                exc.kind,
                extra={"auth_state": state.value, "auth_kind": exc.kind},
            )
            raise

        return AuthenticatedUser(identity=identity, claims=claims)
