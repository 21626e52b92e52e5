# wellbite/infra/sqlalchemy/user_directory.py
from __future__ import annotations

from collections.abc import Callable
from uuid import UUID

from wellbite.models.user import User
from wellbite.services._shared.ports import UserDirectory
from wellbite.services.auth.dto import UserIdentity
from wellbite.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork


def to_identity(user: User) -> UserIdentity:
    """Project an ORM user onto the read-only identity the token code uses."""
    return UserIdentity(
        id=user.id,
        email=user.email,
        role=user.role.value,
        full_name=user.full_name,
    )


class SQLAlchemyUserDirectory(UserDirectory):
    """User directory backed by the ``users`` table."""

    def __init__(self, uow_factory: Callable[[], SQLAlchemyUnitOfWork] = SQLAlchemyUnitOfWork):
        self._uow_factory = uow_factory

    def get_by_id(self, user_id: UUID) -> UserIdentity | None:
        with self._uow_factory() as uow:
            user = uow.users.get(user_id)
            return to_identity(user) if user is not None else None

    def authenticate(self, email: str, password: str) -> UserIdentity | None:
        with self._uow_factory() as uow:
            user = uow.users.authenticate(email, password)
            return to_identity(user) if user is not None else None
