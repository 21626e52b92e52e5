# wellbite/services/users/service.py
"""User provisioning service: creates the identities the token subsystem authenticates."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from wellbite.infra.sqlalchemy.user_directory import to_identity
from wellbite.models.user import Role
from wellbite.repositories.user import UserRepository
from wellbite.services._shared.base import BaseService
from wellbite.services._shared.errors import ConflictError, violates
from wellbite.services.auth.dto import UserIdentity
from wellbite.services.users.dto import UserCreateIn

log = logging.getLogger(__name__)


class UserService(BaseService):
    """Application service for user provisioning."""

    def create_user(self, dto: UserCreateIn) -> UserIdentity:
        """
        Create a user with a hashed password.

        :param dto: User creation input DTO.
        :type dto: UserCreateIn
        :returns: Identity of the new user.
        :rtype: UserIdentity
        :raises ConflictError: If the email is already registered.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users

            if repo.exists_by_email(dto.email):
                raise ConflictError("User", "email already in use")

            try:
                user = repo.create(
                    email=dto.email,
                    password=dto.password,
                    first_name=dto.first_name,
                    last_name=dto.last_name,
                    role=Role(dto.role),
                )
            except IntegrityError as exc:
                if violates(exc, "uq_users_email", "users.email"):
                    raise ConflictError("User", "email already in use") from exc
                raise  # unknown integrity error -> bubble up

            identity = to_identity(user)

        log.info("User created", extra={"user_id": str(identity.id)})
        return identity
