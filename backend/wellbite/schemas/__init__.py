"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    LoginResponseSchema,
    LogoutRequestSchema,
    RefreshRequestSchema,
    RefreshResponseSchema,
)
from .user import UserCreateSchema, UserSchema

__all__ = [
    "LoginResponseSchema",
    "LogoutRequestSchema",
    "RefreshRequestSchema",
    "RefreshResponseSchema",
    "UserSchema",
    "UserCreateSchema",
]
