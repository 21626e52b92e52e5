"""Refresh token repository: the SQL side of the refresh-token store."""

from __future__ import annotations

from datetime import datetime
from typing import cast
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError

from wellbite.models.refresh_token import RefreshToken
from wellbite.repositories.base import BaseRepository
from wellbite.services._shared.errors import ConflictError, violates

TOKEN_UNIQUE_CONSTRAINT = "uq_refresh_tokens_token"


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    """Persistence-only repository for :class:`RefreshToken`."""

    model = RefreshToken

    def create(self, *, user_id: UUID, token: str, expires_at: datetime) -> RefreshToken:
        """Insert a new, non-revoked row.

        The insert runs inside a SAVEPOINT so a uniqueness violation only rolls
        back this row and leaves the caller's transaction usable.

        :raises ConflictError: If ``token`` already exists.
        """
        row = RefreshToken(user_id=user_id, token=token, expires_at=expires_at, revoked=False)
        try:
            with self.session.begin_nested():
                self.session.add(row)
                self.session.flush()
        except IntegrityError as exc:
            if violates(exc, TOKEN_UNIQUE_CONSTRAINT, "refresh_tokens.token"):
                raise ConflictError("RefreshToken", "token value already issued") from exc
            raise
        return row

    def find_by_value(self, token: str) -> RefreshToken | None:
        stmt = select(RefreshToken).where(RefreshToken.token == token)
        return cast(RefreshToken | None, self.session.execute(stmt).scalars().first())

    def mark_revoked(self, token: str) -> bool:
        """Set ``revoked`` with a single conditional ``UPDATE``.

        Re-revoking matches the row again and is harmless.

        :returns: ``True`` when a row with ``token`` exists.
        """
        stmt = (
            update(RefreshToken)
            .where(RefreshToken.token == token)
            .values(revoked=True)
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)
        return bool(result.rowcount)
