"""Tests for the SQLAlchemy-backed refresh token store."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import select
from wellbite.infra.sqlalchemy.refresh_token_store import SQLAlchemyRefreshTokenStore
from wellbite.models import RefreshToken
from wellbite.services._shared.errors import ConflictError, TokenNotFoundError

from tests.factories.user import UserFactory
from tests.helpers.utils import not_raises


@pytest.fixture()
def store():
    return SQLAlchemyRefreshTokenStore()


@pytest.fixture()
def owner(session):
    return UserFactory()


def _in_two_days() -> datetime:
    return datetime.now(UTC).replace(microsecond=0) + timedelta(days=2)


def test_create_then_find_returns_a_valid_record(store, owner):
    expires_at = _in_two_days()

    created = store.create(user_id=owner.id, token="value-1", expires_at=expires_at)
    found = store.find_by_value("value-1")

    assert found == created
    assert found.user_id == owner.id
    assert found.revoked is False
    assert found.expires_at == expires_at
    assert found.expires_at.tzinfo is not None
    assert not found.is_expired(datetime.now(UTC))


def test_find_unknown_value_returns_none(store):
    assert store.find_by_value("nope") is None


def test_duplicate_value_conflicts_and_store_stays_usable(store, owner, session):
    store.create(user_id=owner.id, token="dup", expires_at=_in_two_days())

    with pytest.raises(ConflictError):
        store.create(user_id=owner.id, token="dup", expires_at=_in_two_days())

    store.create(user_id=owner.id, token="fresh", expires_at=_in_two_days())
    values = session.execute(select(RefreshToken.token)).scalars().all()
    assert sorted(values) == ["dup", "fresh"]


def test_mark_revoked_sets_the_flag_once(store, owner):
    store.create(user_id=owner.id, token="to-revoke", expires_at=_in_two_days())

    store.mark_revoked("to-revoke")
    with not_raises(TokenNotFoundError):
        store.mark_revoked("to-revoke")

    record = store.find_by_value("to-revoke")
    assert record.revoked is True
    assert not record.is_expired(datetime.now(UTC))


def test_mark_revoked_unknown_value_raises(store):
    with pytest.raises(TokenNotFoundError):
        store.mark_revoked("missing")


def test_revoking_does_not_touch_other_tokens(store, owner):
    store.create(user_id=owner.id, token="a", expires_at=_in_two_days())
    store.create(user_id=owner.id, token="b", expires_at=_in_two_days())

    store.mark_revoked("a")

    assert store.find_by_value("b").revoked is False
