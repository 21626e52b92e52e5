"""User repository for persistence and credential checks."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from wellbite.models.user import Role, User
from wellbite.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It NEVER handles JWT or session creation, only DB-level user management.
    """

    model = User

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :returns: User instance or ``None`` when not found.
        """
        stmt = select(User).where(User.email == email.lower().strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_email(self, email: str) -> bool:
        stmt = select(User.id).where(User.email == email.lower().strip())
        return bool(self.session.execute(stmt).first())

    def create(
        self,
        *,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        role: Role = Role.NONE,
    ) -> User:
        """Stage and flush a new user; the model hashes ``password``."""
        user = User(email=email, first_name=first_name, last_name=last_name, role=role)
        user.password = password
        return self.add(user)

    def authenticate(self, email: str, password: str) -> User | None:
        """Authenticate a user by email and password.

        :returns: Authenticated user or ``None`` when credentials fail.
        """
        user = self.get_by_email(email)
        if not user or not user.verify_password(password):
            return None
        return user
