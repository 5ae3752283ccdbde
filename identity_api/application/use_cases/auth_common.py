from __future__ import annotations

from datetime import datetime, timezone

from identity_api.application.dto.auth import AuthTokensOutput
from identity_api.application.ports.token_port import TokenPort
from identity_api.application.ports.user_store_port import UserStorePort
from identity_api.domain.entities.user import PublicUser, User
from identity_api.domain.exceptions import ValidationError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def normalize_username(username: str) -> str:
    return username.strip().lower()


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def require_fields(message: str, *values: str | None) -> None:
    if any(is_blank(value) for value in values):
        raise ValidationError(message)


def to_public_user(user: User) -> PublicUser:
    return PublicUser(
        id=user.id,
        username=user.username,
        email=user.email,
        full_name=user.full_name,
        avatar=user.avatar,
        cover_image=user.cover_image,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def issue_tokens(
    *,
    user: User,
    user_store: UserStorePort,
    token_port: TokenPort,
) -> AuthTokensOutput:
    now = utcnow()
    access_token, access_expires_at = token_port.create_access_token(user=user, now=now)
    refresh_token, refresh_expires_at = token_port.create_refresh_token(user_id=user.id, now=now)
    # Overwrites any previous value: one refresh slot per user.
    user_store.set_refresh_token(user_id=user.id, refresh_token=refresh_token)
    return AuthTokensOutput(
        user=to_public_user(user),
        access_token=access_token,
        refresh_token=refresh_token,
        access_expires_at=access_expires_at,
        refresh_expires_at=refresh_expires_at,
    )
