from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from identity_api.domain.entities.user import User
from identity_api.domain.exceptions import InvalidTokenError
from identity_api.infrastructure.security.token_service import JwtTokenService


def _user() -> User:
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    return User(
        id="user-1",
        username="alice",
        email="alice@example.com",
        full_name="Alice Doe",
        password_hash="hashed",
        avatar="https://media.example.com/a.png",
        cover_image="",
        refresh_token=None,
        created_at=now,
        updated_at=now,
    )


def test_access_token_carries_identity_claims(token_service):
    now = datetime.now(timezone.utc)
    token, expires_at = token_service.create_access_token(user=_user(), now=now)

    payload = token_service.decode_access_token(token=token)

    assert payload.user_id == "user-1"
    assert payload.username == "alice"
    assert payload.email == "alice@example.com"
    assert payload.full_name == "Alice Doe"
    assert expires_at == now + timedelta(minutes=15)


def test_refresh_token_carries_only_user_id(token_service):
    now = datetime.now(timezone.utc)
    token, expires_at = token_service.create_refresh_token(user_id="user-1", now=now)

    claims = jwt.decode(token, "refresh-secret-for-tests-0123456789abcdef", algorithms=["HS256"])

    assert token_service.verify_refresh_token(token=token) == "user-1"
    assert "email" not in claims and "username" not in claims
    assert expires_at == now + timedelta(days=10)


def test_refresh_tokens_minted_together_differ(token_service):
    now = datetime.now(timezone.utc)

    first, _ = token_service.create_refresh_token(user_id="user-1", now=now)
    second, _ = token_service.create_refresh_token(user_id="user-1", now=now)

    assert first != second


def test_expired_refresh_token_is_invalid(token_service):
    token, _ = token_service.create_refresh_token(
        user_id="user-1",
        now=datetime.now(timezone.utc) - timedelta(days=30),
    )

    with pytest.raises(InvalidTokenError):
        token_service.verify_refresh_token(token=token)


def test_tokens_are_not_interchangeable(token_service):
    now = datetime.now(timezone.utc)
    access, _ = token_service.create_access_token(user=_user(), now=now)
    refresh, _ = token_service.create_refresh_token(user_id="user-1", now=now)

    with pytest.raises(InvalidTokenError):
        token_service.verify_refresh_token(token=access)
    with pytest.raises(InvalidTokenError):
        token_service.decode_access_token(token=refresh)


def test_refresh_token_signed_with_other_secret_is_invalid(token_service):
    forged = jwt.encode(
        {"sub": "user-1", "type": "refresh", "exp": int(datetime.now(timezone.utc).timestamp()) + 60},
        "attacker-secret-0123456789abcdef-0123",
        algorithm="HS256",
    )

    with pytest.raises(InvalidTokenError):
        token_service.verify_refresh_token(token=forged)


@pytest.mark.parametrize(
    "access_secret, refresh_secret",
    [("", "refresh"), ("access", ""), ("same", "same")],
)
def test_constructor_rejects_bad_secrets(access_secret, refresh_secret):
    with pytest.raises(ValueError):
        JwtTokenService(
            access_token_secret=access_secret,
            access_ttl_minutes=15,
            refresh_token_secret=refresh_secret,
            refresh_ttl_days=10,
        )
