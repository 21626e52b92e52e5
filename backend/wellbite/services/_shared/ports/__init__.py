"""
wellbite.services._shared.ports
===============================

Collection of *ports* (hexagonal interfaces) that define the contracts
for token management and authentication infrastructure.

These ports decouple the service layer from concrete implementations
of token signing, refresh-token storage, revocation and user lookup.

Modules
-------
- :mod:`claims_codec`:
    Defines :class:`~.ClaimsCodec`, signing and verification of access tokens.

- :mod:`refresh_token_store`:
    Defines :class:`~.RefreshTokenStore` and the :class:`~.RefreshTokenRecord`
    read model.

- :mod:`revocation_check`:
    Defines :class:`~.AccessTokenRevocationCheck` and its no-op default.

- :mod:`user_directory`:
    Defines :class:`~.UserDirectory`, lookup by id and credential checks.

Design Notes
------------
Concrete adapters (SQLAlchemy, Redis, PyJWT) implement these interfaces under
``wellbite.infra``; the in-memory variants back the unit tests.
"""

from __future__ import annotations

from .claims_codec import ClaimsCodec
from .refresh_token_store import (
    InMemoryRefreshTokenStore,
    RefreshTokenRecord,
    RefreshTokenStore,
)
from .revocation_check import (
    AccessTokenRevocationCheck,
    InMemoryRevocationCheck,
    NullRevocationCheck,
)
from .user_directory import InMemoryUserDirectory, UserDirectory

__all__ = [
    "ClaimsCodec",
    "RefreshTokenStore",
    "RefreshTokenRecord",
    "InMemoryRefreshTokenStore",
    "AccessTokenRevocationCheck",
    "NullRevocationCheck",
    "InMemoryRevocationCheck",
    "UserDirectory",
    "InMemoryUserDirectory",
]
