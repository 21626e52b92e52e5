"""Persisted refresh tokens."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Boolean, DateTime, ForeignKey, String, UniqueConstraint, Uuid, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wellbite.core.extensions import db
from wellbite.services.auth.dto import REFRESH_TOKEN_MAX_LENGTH

from .base import ReprMixin, TimestampMixin, UUIDPKMixin

if TYPE_CHECKING:
    from .user import User


class RefreshToken(UUIDPKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Long-lived, revocable credential exchanged for new access tokens.

    Fields
    ------
    user_id : UUID
        Owner; rows go away with the user (``ON DELETE CASCADE``).
    token : str
        High-entropy opaque value handed to the client. Globally unique.
    expires_at : datetime
        Absolute expiry fixed at issuance.
    revoked : bool
        Set once on logout and never reset.

    Rows are never serialized to clients; the token store maps them to
    :class:`~wellbite.services._shared.ports.RefreshTokenRecord`.
    """

    __tablename__ = "refresh_tokens"
    __repr_attrs__ = ("user_id", "expires_at", "revoked")

    user_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    token: Mapped[str] = mapped_column(String(REFRESH_TOKEN_MAX_LENGTH), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    revoked: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    user: Mapped[User] = relationship(back_populates="refresh_tokens")

    __table_args__ = (UniqueConstraint("token", name="uq_refresh_tokens_token"),)
