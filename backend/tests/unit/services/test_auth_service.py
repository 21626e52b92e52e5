# tests/unit/services/test_auth_service.py
from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from freezegun import freeze_time
from wellbite.infra.jwt.claims_codec import JWTClaimsCodec
from wellbite.services._shared.errors import (
    InvalidCredentialsError,
    TokenNotFoundError,
    TokenRevokedError,
    UnprovisionedUserError,
    UserNotFoundError,
)
from wellbite.services._shared.ports import (
    InMemoryRefreshTokenStore,
    InMemoryRevocationCheck,
    InMemoryUserDirectory,
)
from wellbite.services.auth.dto import LoginIn, LoginOut, LogoutIn, RefreshIn
from wellbite.services.auth.issuer import TokenIssuer
from wellbite.services.auth.revocation import RevocationService
from wellbite.services.auth.service import AuthService
from wellbite.services.auth.verifier import TokenVerifier

from tests.helpers.auth import identity

PASSWORD = "Passw0rd!"


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def store():
    return InMemoryRefreshTokenStore()


@pytest.fixture()
def users():
    return InMemoryUserDirectory()


@pytest.fixture()
def codec(token_settings):
    return JWTClaimsCodec(token_settings)


@pytest.fixture()
def revocation_check():
    return InMemoryRevocationCheck()


@pytest.fixture()
def service(token_settings, store, users, codec, revocation_check) -> AuthService:
    """Build an AuthService wired to in-memory doubles and the real codec."""
    return AuthService(
        issuer=TokenIssuer(settings=token_settings, store=store),
        verifier=TokenVerifier(store=store, codec=codec),
        revocation=RevocationService(store=store),
        codec=codec,
        users=users,
        revocation_check=revocation_check,
    )


@pytest.fixture()
def client_user(users):
    return users.add(identity(role="client", email="client@example.com"), PASSWORD)


# -------------------------------- Login ----------------------------------- #
def test_login_issues_access_and_refresh_tokens(service, client_user, store, codec):
    now = datetime(2026, 5, 4, 8, 30, tzinfo=UTC)
    with freeze_time(now):
        out = service.login(LoginIn(email="client@example.com", password=PASSWORD))

        claims = codec.verify(out.access_token)

    assert isinstance(out, LoginOut)
    assert out.user == client_user
    assert out.expires_at == now + timedelta(days=2)
    assert claims.user_id == client_user.id
    assert claims.role == "client"
    assert store.find_by_value(out.refresh_token).user_id == client_user.id


def test_login_invalid_credentials(service, client_user):
    with pytest.raises(InvalidCredentialsError):
        service.login(LoginIn(email="client@example.com", password="wrong"))
    with pytest.raises(InvalidCredentialsError):
        service.login(LoginIn(email="missing@example.com", password=PASSWORD))


def test_login_unprovisioned_user_gets_nothing(service, users, store):
    users.add(identity(role="none", email="pending@example.com"), PASSWORD)

    with pytest.raises(UnprovisionedUserError):
        service.login(LoginIn(email="pending@example.com", password=PASSWORD))

    assert len(store) == 0


# ------------------------------- Refresh ---------------------------------- #
def test_refresh_returns_a_new_access_token(service, client_user, codec):
    login = service.login(LoginIn(email=client_user.email, password=PASSWORD))

    out = service.refresh(RefreshIn(refresh_token=login.refresh_token))

    claims = codec.verify(out.access_token)
    assert claims.user_id == client_user.id
    assert claims.token_id != codec.verify(login.access_token).token_id
    assert out.expires_at == claims.expires_at


def test_refresh_does_not_consume_the_refresh_token(service, client_user):
    login = service.login(LoginIn(email=client_user.email, password=PASSWORD))

    service.refresh(RefreshIn(refresh_token=login.refresh_token))
    service.refresh(RefreshIn(refresh_token=login.refresh_token))


def test_refresh_with_unknown_token(service):
    with pytest.raises(TokenNotFoundError):
        service.refresh(RefreshIn(refresh_token="never-issued"))


def test_refresh_after_logout(service, client_user):
    login = service.login(LoginIn(email=client_user.email, password=PASSWORD))
    service.logout(LogoutIn(refresh_token=login.refresh_token))

    with pytest.raises(TokenRevokedError):
        service.refresh(RefreshIn(refresh_token=login.refresh_token))


def test_refresh_for_a_vanished_owner(service, store):
    store.create(
        user_id=identity().id, token="orphan", expires_at=datetime.now(UTC) + timedelta(days=1)
    )

    with pytest.raises(UserNotFoundError):
        service.refresh(RefreshIn(refresh_token="orphan"))


# -------------------------------- Logout ---------------------------------- #
def test_logout_revokes_refresh_and_hands_access_claims_to_the_hook(
    service, client_user, store, codec, revocation_check
):
    login = service.login(LoginIn(email=client_user.email, password=PASSWORD))
    claims = codec.verify(login.access_token)

    service.logout(LogoutIn(refresh_token=login.refresh_token, access_claims=claims))

    assert store.find_by_value(login.refresh_token).revoked is True
    assert revocation_check.is_revoked(claims) is True


def test_logout_unknown_token(service):
    with pytest.raises(TokenNotFoundError):
        service.logout(LogoutIn(refresh_token="never-issued"))


def test_default_revocation_hook_keeps_access_tokens_alive(
    token_settings, store, users, codec, client_user
):
    service = AuthService(
        issuer=TokenIssuer(settings=token_settings, store=store),
        verifier=TokenVerifier(store=store, codec=codec),
        revocation=RevocationService(store=store),
        codec=codec,
        users=users,
    )
    login = service.login(LoginIn(email=client_user.email, password=PASSWORD))
    claims = codec.verify(login.access_token)

    service.logout(LogoutIn(refresh_token=login.refresh_token, access_claims=claims))

    assert service.revocation_check.is_revoked(claims) is False
