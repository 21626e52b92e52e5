"""Unit tests for ``TokenVerifier``."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from freezegun import freeze_time
from wellbite.infra.jwt.claims_codec import JWTClaimsCodec
from wellbite.services._shared.errors import (
    ExpiredTokenError,
    TokenNotFoundError,
    TokenRevokedError,
)
from wellbite.services._shared.ports import InMemoryRefreshTokenStore
from wellbite.services.auth.issuer import TokenIssuer
from wellbite.services.auth.verifier import TokenVerifier

from tests.helpers.auth import identity, make_claims


@pytest.fixture()
def store():
    return InMemoryRefreshTokenStore()


@pytest.fixture()
def codec(token_settings):
    return JWTClaimsCodec(token_settings)


@pytest.fixture()
def verifier(store, codec):
    return TokenVerifier(store=store, codec=codec)


def _past() -> datetime:
    return datetime.now(UTC) - timedelta(seconds=1)


def test_issued_refresh_token_resolves_to_its_owner(token_settings, store, verifier):
    user = identity()
    _, record = TokenIssuer(settings=token_settings, store=store).issue_pair(user)

    found, owner_id = verifier.verify_refresh_token(record.token)

    assert owner_id == user.id
    assert found == record


def test_unknown_refresh_token(verifier):
    with pytest.raises(TokenNotFoundError):
        verifier.verify_refresh_token("never-issued")


def test_revoked_refresh_token(store, verifier):
    record = store.create(
        user_id=uuid4(), token="rt", expires_at=datetime.now(UTC) + timedelta(days=1)
    )
    store.mark_revoked(record.token)

    with pytest.raises(TokenRevokedError):
        verifier.verify_refresh_token("rt")


def test_revoked_wins_over_expired(store, verifier):
    store.create(user_id=uuid4(), token="rt", expires_at=_past())
    store.mark_revoked("rt")

    with pytest.raises(TokenRevokedError):
        verifier.verify_refresh_token("rt")


def test_expired_refresh_token(store, verifier):
    store.create(user_id=uuid4(), token="rt", expires_at=_past())

    with pytest.raises(ExpiredTokenError):
        verifier.verify_refresh_token("rt")


def test_refresh_token_expires_with_the_clock(token_settings, store, verifier):
    with freeze_time("2026-03-01 12:00:00"):
        _, record = TokenIssuer(settings=token_settings, store=store).issue_pair(identity())

    with freeze_time("2026-03-03 11:59:59"):
        verifier.verify_refresh_token(record.token)

    with freeze_time("2026-03-03 12:00:00"), pytest.raises(ExpiredTokenError):
        verifier.verify_refresh_token(record.token)


def test_access_token_is_checked_by_the_codec(token_settings, codec, verifier):
    claims = make_claims(token_settings)

    assert verifier.verify_access_token(codec.sign(claims)) == claims


def test_expired_access_token(token_settings, codec, verifier):
    token = codec.sign(make_claims(token_settings, expires_in=timedelta(seconds=-30)))

    with pytest.raises(ExpiredTokenError):
        verifier.verify_access_token(token)
