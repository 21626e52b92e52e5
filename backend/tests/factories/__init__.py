"""factory_boy base wired to the per-test transactional session."""

from __future__ import annotations

import factory

_current_session = None


def bind_session(session) -> None:
    """Point every factory at ``session`` (called by an autouse fixture)."""
    global _current_session
    _current_session = session


def current_session():
    if _current_session is None:
        raise RuntimeError("No session bound for factories; request the 'session' fixture.")
    return _current_session


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Commits each object so it survives a service-level rollback in the same test."""

    class Meta:
        abstract = True
        sqlalchemy_session_factory = current_session
        sqlalchemy_session_persistence = "commit"
