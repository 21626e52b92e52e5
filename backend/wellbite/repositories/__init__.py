"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from wellbite.repositories.base import BaseRepository
from wellbite.repositories.refresh_token import RefreshTokenRepository
from wellbite.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "RefreshTokenRepository",
    "UserRepository",
]
