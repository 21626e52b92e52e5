# wellbite/services/users/dto.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UserCreateIn:
    """
    Input DTO for user provisioning.

    :param email: User email (normalized by the model).
    :type email: str
    :param password: Raw password (hashed by the model).
    :type password: str
    :param first_name: Given name.
    :type first_name: str
    :param last_name: Family name.
    :type last_name: str
    :param role: Role value; ``none`` until the account is provisioned.
    :type role: str
    """

    email: str
    password: str
    first_name: str
    last_name: str
    role: str = "none"
