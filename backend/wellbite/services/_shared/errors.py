"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP. They serve as stable contracts between repositories, token
infrastructure and application services.

The translation to HTTP responses (RFC 7807) is handled by
``wellbite/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, *markers: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL reports the constraint name; SQLite only reports the offending
    ``table.column``, so callers may pass both.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    markers : str
        Constraint names or ``table.column`` fragments to look for.

    Returns
    -------
    bool
        True if the IntegrityError message mentions any marker.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return any(marker.lower() in message for marker in markers)


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories or domain logic.
    - The API layer or BaseService will later translate them to APIError.
    """

    pass


# --------------------------------------------------------------------------- #
# Persistence errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.entity} not found: {self.key}"


class TokenNotFoundError(NotFoundError):
    """No refresh token row matches the presented value.

    The value itself is a credential and never ends up in the message.
    """

    def __init__(self) -> None:
        super().__init__("RefreshToken", "presented value")


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:  # pragma: no cover
        return f"Conflict on {self.entity}: {self.detail}"


# --------------------------------------------------------------------------- #
# Authentication errors (all rendered as a generic 401)
# --------------------------------------------------------------------------- #


class AuthenticationError(ServiceError):
    """
    Base for every failure that must surface as *401 Unauthorized*.

    ``kind`` is a stable label for logs and tests; clients never see it.
    """

    kind: ClassVar[str] = "unauthorized"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.kind.replace("_", " "))


class MissingTokenError(AuthenticationError):
    kind = "missing_token"


class MalformedTokenError(AuthenticationError):
    kind = "malformed_token"


class SignatureInvalidError(MalformedTokenError):
    kind = "signature_invalid"


class ExpiredTokenError(AuthenticationError):
    """Raised for both expired access tokens and expired refresh tokens."""

    kind = "token_expired"


class InvalidAudienceError(AuthenticationError):
    kind = "invalid_audience"


class InvalidIssuerError(AuthenticationError):
    kind = "invalid_issuer"


class TokenRevokedError(AuthenticationError):
    kind = "token_revoked"


class UserNotFoundError(AuthenticationError):
    kind = "user_not_found"


class InvalidCredentialsError(AuthenticationError):
    kind = "invalid_credentials"


class UnprovisionedUserError(AuthenticationError):
    """The user exists but holds the ``none`` role."""

    kind = "unprovisioned_user"


# --------------------------------------------------------------------------- #
# Issuance errors
# --------------------------------------------------------------------------- #


class IdentityMissingError(ServiceError):
    """Tokens were requested for a user without a persisted identifier."""

    def __init__(self, message: str = "User has no identifier") -> None:
        super().__init__(message)


class SigningError(ServiceError):
    """The signing key is missing or the JWT library refused to encode."""

    def __init__(self, message: str = "Unable to sign access token") -> None:
        super().__init__(message)
