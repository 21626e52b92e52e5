# wellbite/infra/sqlalchemy/refresh_token_store.py
from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from uuid import UUID

from wellbite.models.refresh_token import RefreshToken
from wellbite.services._shared.errors import TokenNotFoundError
from wellbite.services._shared.ports import RefreshTokenRecord, RefreshTokenStore
from wellbite.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork


def _to_utc(dt: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes; every value we store is UTC.
    if dt is None:
        return None
    return dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt.astimezone(UTC)


def _to_record(row: RefreshToken) -> RefreshTokenRecord:
    return RefreshTokenRecord(
        id=row.id,
        user_id=row.user_id,
        token=row.token,
        expires_at=_to_utc(row.expires_at),  # type: ignore[arg-type]
        revoked=bool(row.revoked),
        created_at=_to_utc(row.created_at),
    )


class SQLAlchemyRefreshTokenStore(RefreshTokenStore):
    """
    Refresh token store backed by the ``refresh_tokens`` table.

    Every call runs in its own Unit of Work and commits on success.
    """

    def __init__(self, uow_factory: Callable[[], SQLAlchemyUnitOfWork] = SQLAlchemyUnitOfWork):
        self._uow_factory = uow_factory

    def create(self, *, user_id: UUID, token: str, expires_at: datetime) -> RefreshTokenRecord:
        with self._uow_factory() as uow:
            row = uow.refresh_tokens.create(user_id=user_id, token=token, expires_at=expires_at)
            return _to_record(row)

    def find_by_value(self, token: str) -> RefreshTokenRecord | None:
        with self._uow_factory() as uow:
            row = uow.refresh_tokens.find_by_value(token)
            return _to_record(row) if row is not None else None

    def mark_revoked(self, token: str) -> None:
        with self._uow_factory() as uow:
            if not uow.refresh_tokens.mark_revoked(token):
                raise TokenNotFoundError()
