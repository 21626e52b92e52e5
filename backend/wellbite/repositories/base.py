"""Generic repository base for SQLAlchemy 2.x.

Repositories are persistence-only:

* no use cases or policies, no token handling;
* no commit/rollback, the Unit of Work owns the transaction;
* writes flush eagerly so a constraint violation surfaces inside the call
  that caused it, where it can be translated into a service error.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar, cast

from sqlalchemy.orm import Session

from wellbite.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


class BaseRepository(Generic[E]):
    """Repository for a single mapped class; subclasses set ``model``."""

    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        """The injected session, else the Flask-scoped one."""
        return self._session if self._session is not None else cast(Session, db.session)

    def add(self, instance: E) -> E:
        """Stage ``instance`` and flush so its primary key is assigned."""
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        """Primary-key lookup (identity map first)."""
        return self.session.get(self.model, entity_id)

    def flush(self) -> None:
        self.session.flush()
