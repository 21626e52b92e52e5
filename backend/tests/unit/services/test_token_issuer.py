"""Unit tests for ``TokenIssuer`` wired to the in-memory refresh store."""

from __future__ import annotations

import dataclasses
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime, timedelta

import pytest
from freezegun import freeze_time
from wellbite.services._shared.errors import ConflictError, IdentityMissingError
from wellbite.services._shared.ports import InMemoryRefreshTokenStore
from wellbite.services.auth.dto import REFRESH_TOKEN_MAX_LENGTH, TokenSettings, UserIdentity
from wellbite.services.auth.issuer import TokenIssuer

from tests.helpers.auth import identity

NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=UTC)


class CollidingStore(InMemoryRefreshTokenStore):
    """Reports a collision for the first ``collisions`` inserts."""

    def __init__(self, collisions: int) -> None:
        super().__init__()
        self.collisions = collisions
        self.attempted: list[str] = []

    def create(self, *, user_id, token, expires_at):
        self.attempted.append(token)
        if len(self.attempted) <= self.collisions:
            raise ConflictError("RefreshToken", "token value already issued")
        return super().create(user_id=user_id, token=token, expires_at=expires_at)


@pytest.fixture()
def store():
    return InMemoryRefreshTokenStore()


@pytest.fixture()
def issuer(token_settings, store):
    return TokenIssuer(settings=token_settings, store=store)


@freeze_time(NOW)
def test_access_claims_carry_identity_and_window(issuer):
    user = identity(role="professional", email="pro@example.com")

    claims = issuer.issue_access_token(user)

    assert claims.subject == str(user.id)
    assert claims.user_id == user.id
    assert claims.email == "pro@example.com"
    assert claims.role == "professional"
    assert claims.issuer == "WellBiteAPI"
    assert claims.audience == ("com.cxcarvaj.WellBite",)
    assert claims.expires_at == NOW + timedelta(days=2)


def test_every_access_token_gets_its_own_id(issuer):
    user = identity()

    assert issuer.issue_access_token(user).token_id != issuer.issue_access_token(user).token_id


def test_user_without_id_cannot_get_tokens(issuer, store):
    anonymous = UserIdentity(id=None, email="ghost@example.com", role="client")

    with pytest.raises(IdentityMissingError):
        issuer.issue_access_token(anonymous)
    with pytest.raises(IdentityMissingError):
        issuer.issue_pair(anonymous)
    assert len(store) == 0


@freeze_time(NOW)
def test_issue_pair_persists_a_refresh_token(issuer, store):
    user = identity()

    claims, record = issuer.issue_pair(user)

    assert record.user_id == user.id
    assert record.revoked is False
    assert record.expires_at == NOW + timedelta(days=2)
    assert len(record.token) >= 43  # 32 random bytes, base64url
    assert store.find_by_value(record.token) == record
    assert claims.user_id == user.id


def test_refresh_window_is_independent_of_access_window(token_settings, store):
    settings = dataclasses.replace(
        token_settings, access_expires=timedelta(minutes=15), refresh_expires=timedelta(days=30)
    )
    issuer = TokenIssuer(settings=settings, store=store)

    with freeze_time(NOW):
        claims, record = issuer.issue_pair(identity())

    assert claims.expires_at == NOW + timedelta(minutes=15)
    assert record.expires_at == NOW + timedelta(days=30)


def test_two_pairs_never_share_a_refresh_value(issuer):
    user = identity()

    _, first = issuer.issue_pair(user)
    _, second = issuer.issue_pair(user)

    assert first.token != second.token


def test_collision_is_retried_with_a_new_value(token_settings):
    store = CollidingStore(collisions=2)
    issuer = TokenIssuer(settings=token_settings, store=store)

    _, record = issuer.issue_pair(identity())

    assert len(store.attempted) == 3
    assert len(set(store.attempted)) == 3
    assert record.token == store.attempted[-1]


def test_collision_gives_up_after_max_attempts(token_settings):
    store = CollidingStore(collisions=10)
    issuer = TokenIssuer(settings=token_settings, store=store)

    with pytest.raises(ConflictError):
        issuer.issue_pair(identity())

    assert len(store.attempted) == token_settings.max_attempts


def test_concurrent_issuance_yields_distinct_values(issuer, store):
    user = identity()

    with ThreadPoolExecutor(max_workers=8) as pool:
        records = list(pool.map(lambda _: issuer.issue_pair(user)[1], range(64)))

    values = {record.token for record in records}
    assert len(values) == 64
    assert len(store) == 64


def test_racing_inserts_of_one_value_keep_it_unique(store):
    user = identity()

    def _insert(_):
        try:
            store.create(user_id=user.id, token="same-value", expires_at=NOW)
        except ConflictError:
            return False
        return True

    with ThreadPoolExecutor(max_workers=8) as pool:
        outcomes = list(pool.map(_insert, range(16)))

    assert outcomes.count(True) == 1
    assert len(store) == 1


def test_largest_allowed_entropy_fits_the_column(token_settings, store):
    settings = dataclasses.replace(token_settings, refresh_token_bytes=96)

    _, record = TokenIssuer(settings=settings, store=store).issue_pair(identity())

    assert len(record.token) <= REFRESH_TOKEN_MAX_LENGTH


@pytest.mark.parametrize("size", [8, 97, 200])
def test_refresh_entropy_outside_bounds_is_rejected(size):
    with pytest.raises(ValueError):
        TokenSettings(secret="s", refresh_token_bytes=size)
    with pytest.raises(ValueError):
        TokenSettings.from_mapping({"JWT_SECRET_KEY": "s", "REFRESH_TOKEN_BYTES": size})
