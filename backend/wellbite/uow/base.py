"""Transaction boundary shared by the token store and the user directory."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wellbite.repositories import RefreshTokenRepository, UserRepository


class UnitOfWork(ABC):
    """
    Context manager that commits when the block succeeds and rolls back when
    it raises. The exception is never swallowed.

    Implementations expose repositories bound to one transaction as
    ``users`` and ``refresh_tokens``.
    """

    users: UserRepository
    refresh_tokens: RefreshTokenRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.rollback()
            return
        try:
            self.commit()
        except Exception:
            self.rollback()
            raise

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...
