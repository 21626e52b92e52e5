"""Service layer public API.

This package exposes the error contracts and transport DTOs of the service
layer so that callers can import from :mod:`wellbite.services` without knowing
internal structure.

Re-exports
----------
- Domain errors (from ``wellbite.services._shared.errors``)
    * :class:`ServiceError`, :class:`NotFoundError`, :class:`ConflictError`
    * :class:`AuthenticationError`

- Auth DTOs (from ``wellbite.services.auth.dto``)
    * :class:`TokenSettings`, :class:`UserIdentity`, :class:`AccessTokenClaims`
    * :class:`LoginIn`, :class:`RefreshIn`, :class:`LogoutIn`
    * :class:`LoginOut`, :class:`RefreshOut`

Services themselves (``AuthService`` and its collaborators) are imported from
their modules; they depend on the unit of work, which in turn depends on
repositories that raise the errors re-exported here.
"""

from __future__ import annotations

from ._shared.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ServiceError,
)
from .auth.dto import (
    AccessTokenClaims,
    LoginIn,
    LoginOut,
    LogoutIn,
    RefreshIn,
    RefreshOut,
    TokenSettings,
    UserIdentity,
)

__all__ = [
    # Errors
    "ServiceError",
    "NotFoundError",
    "ConflictError",
    "AuthenticationError",
    # Auth DTOs
    "TokenSettings",
    "UserIdentity",
    "AccessTokenClaims",
    "LoginIn",
    "RefreshIn",
    "LogoutIn",
    "LoginOut",
    "RefreshOut",
]
