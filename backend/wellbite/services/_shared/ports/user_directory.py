from __future__ import annotations

from typing import Protocol
from uuid import UUID

from wellbite.services.auth.dto import UserIdentity


class UserDirectory(Protocol):
    """
    Port onto the user store that owns identities and credentials.

    The token subsystem only reads from it.
    """

    def get_by_id(self, user_id: UUID) -> UserIdentity | None: ...

    def authenticate(self, email: str, password: str) -> UserIdentity | None:
        """Return the identity when ``password`` matches, otherwise ``None``."""
        ...


class InMemoryUserDirectory(UserDirectory):
    """Dictionary-backed directory used in unit tests."""

    def __init__(self) -> None:
        self._users: dict[UUID, tuple[UserIdentity, str]] = {}

    def add(self, identity: UserIdentity, password: str = "") -> UserIdentity:
        if identity.id is None:
            raise ValueError("identity.id is required")
        self._users[identity.id] = (identity, password)
        return identity

    def get_by_id(self, user_id: UUID) -> UserIdentity | None:
        entry = self._users.get(user_id)
        return entry[0] if entry else None

    def authenticate(self, email: str, password: str) -> UserIdentity | None:
        for identity, secret in self._users.values():
            if identity.email == email.lower().strip() and secret == password:
                return identity
        return None
