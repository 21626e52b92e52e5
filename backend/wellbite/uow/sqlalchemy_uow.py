"""Unit of Work over the Flask-SQLAlchemy scoped session."""

from __future__ import annotations

from sqlalchemy.orm import Session, scoped_session

from wellbite.core.extensions import db
from wellbite.repositories import RefreshTokenRepository, UserRepository
from wellbite.uow.base import UnitOfWork


class SQLAlchemyUnitOfWork(UnitOfWork):
    """
    Both repositories share ``session``, which defaults to ``db.session`` as
    resolved at construction time (tests swap it for a SAVEPOINT-bound one).
    """

    def __init__(self, session: Session | scoped_session | None = None) -> None:
        self.session = session if session is not None else db.session
        self.users = UserRepository(session=self.session)
        self.refresh_tokens = RefreshTokenRepository(session=self.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        return self

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
