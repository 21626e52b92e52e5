from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from wellbite.services._shared.errors import ConflictError, TokenNotFoundError


@dataclass(frozen=True)
class RefreshTokenRecord:
    """
    Read-model for a stored refresh token.

    :ivar id: Row identifier.
    :ivar user_id: Owner user id.
    :ivar token: Opaque value handed to the client.
    :ivar expires_at: Absolute expiration (UTC).
    :ivar revoked: Whether the token was explicitly revoked.
    :ivar created_at: Issuance time (UTC).
    """

    id: UUID
    user_id: UUID
    token: str
    expires_at: datetime
    revoked: bool
    created_at: datetime | None = None

    def is_expired(self, now: datetime) -> bool:
        """Expired once ``now`` reaches ``expires_at``."""
        return self.expires_at <= now


class RefreshTokenStore(Protocol):
    """
    Durable store for refresh tokens.

    Values are unique across the store, revocation is a single atomic write.
    """

    def create(self, *, user_id: UUID, token: str, expires_at: datetime) -> RefreshTokenRecord:
        """
        Persist a new, non-revoked token.

        :raises ConflictError: If ``token`` is already stored.
        """
        ...

    def find_by_value(self, token: str) -> RefreshTokenRecord | None:
        """Fetch a token snapshot (if present)."""
        ...

    def mark_revoked(self, token: str) -> None:
        """
        Set ``revoked``. Revoking twice is a no-op.

        :raises TokenNotFoundError: If no token has this value.
        """
        ...


class InMemoryRefreshTokenStore(RefreshTokenStore):
    """
    In-memory refresh token store.

    .. note::
       Uses a threading lock to simulate atomicity in unit tests.
    """

    def __init__(self) -> None:
        self._by_value: dict[str, RefreshTokenRecord] = {}
        self._lock = threading.Lock()

    def create(self, *, user_id: UUID, token: str, expires_at: datetime) -> RefreshTokenRecord:
        with self._lock:
            if token in self._by_value:
                raise ConflictError("RefreshToken", "token value already issued")
            record = RefreshTokenRecord(
                id=uuid4(),
                user_id=user_id,
                token=token,
                expires_at=expires_at,
                revoked=False,
                created_at=datetime.now(UTC),
            )
            self._by_value[token] = record
            return record

    def find_by_value(self, token: str) -> RefreshTokenRecord | None:
        with self._lock:
            return self._by_value.get(token)

    def mark_revoked(self, token: str) -> None:
        with self._lock:
            record = self._by_value.get(token)
            if record is None:
                raise TokenNotFoundError()
            self._by_value[token] = replace(record, revoked=True)

    def __len__(self) -> int:
        return len(self._by_value)
