from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import Cookie, Header, HTTPException

from identity_api.application.use_cases.change_password import ChangePasswordUseCase
from identity_api.application.use_cases.get_channel_profile import GetChannelProfileUseCase
from identity_api.application.use_cases.get_current_user import GetCurrentUserUseCase
from identity_api.application.use_cases.login_user import LoginUserUseCase
from identity_api.application.use_cases.logout_user import LogoutUserUseCase
from identity_api.application.use_cases.refresh_session import RefreshSessionUseCase
from identity_api.application.use_cases.register_user import RegisterUserUseCase
from identity_api.application.use_cases.update_account_details import UpdateAccountDetailsUseCase
from identity_api.application.use_cases.update_user_media import (
    UpdateAvatarUseCase,
    UpdateCoverImageUseCase,
)
from identity_api.domain.entities.user import User
from identity_api.domain.exceptions import InvalidTokenError
from identity_api.infrastructure.clients.media_uploader import HttpMediaUploader
from identity_api.infrastructure.db.engine import get_engine
from identity_api.infrastructure.db.repositories.subscriptions_repository import (
    SqlSubscriptionsRepository,
)
from identity_api.infrastructure.db.repositories.users_repository import SqlUsersRepository
from identity_api.infrastructure.security.password_hasher import PasswordHasher
from identity_api.infrastructure.security.token_service import JwtTokenService
from identity_api.shared.config import Settings, get_settings


logger = logging.getLogger(__name__)

ACCESS_COOKIE_NAME = "access_token"
REFRESH_COOKIE_NAME = "refresh_token"


def _get_db_engine():
    settings = get_settings()
    if not settings.postgres_dsn:
        raise HTTPException(status_code=500, detail="POSTGRES_DSN is required.")
    return get_engine(
        settings.postgres_dsn,
        settings.db_connect_timeout_seconds,
        settings.db_statement_timeout_ms,
    )


@lru_cache(maxsize=1)
def _get_password_hasher() -> PasswordHasher:
    return PasswordHasher()


def build_token_service(settings: Settings) -> JwtTokenService:
    return JwtTokenService(
        access_token_secret=settings.access_token_secret,
        access_ttl_minutes=settings.access_token_ttl_minutes,
        refresh_token_secret=settings.refresh_token_secret,
        refresh_ttl_days=settings.refresh_token_ttl_days,
    )


@lru_cache(maxsize=1)
def _get_token_service() -> JwtTokenService:
    try:
        return build_token_service(get_settings())
    except ValueError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@lru_cache(maxsize=1)
def _get_media_uploader() -> HttpMediaUploader:
    settings = get_settings()
    if not settings.media_upload_url:
        raise HTTPException(status_code=500, detail="MEDIA_UPLOAD_URL is required.")
    return HttpMediaUploader(
        upload_url=settings.media_upload_url,
        upload_preset=settings.media_upload_preset,
        timeout_seconds=settings.media_upload_timeout_seconds,
    )


def _get_users_repository() -> SqlUsersRepository:
    return SqlUsersRepository(_get_db_engine(), password_hasher=_get_password_hasher())


def _get_subscriptions_repository() -> SqlSubscriptionsRepository:
    return SqlSubscriptionsRepository(_get_db_engine())


def get_register_user_use_case() -> RegisterUserUseCase:
    return RegisterUserUseCase(
        user_store=_get_users_repository(),
        media_uploader=_get_media_uploader(),
    )


def get_login_user_use_case() -> LoginUserUseCase:
    return LoginUserUseCase(
        user_store=_get_users_repository(),
        password_hasher=_get_password_hasher(),
        token_port=_get_token_service(),
    )


def get_logout_user_use_case() -> LogoutUserUseCase:
    return LogoutUserUseCase(user_store=_get_users_repository())


def get_refresh_session_use_case() -> RefreshSessionUseCase:
    return RefreshSessionUseCase(
        user_store=_get_users_repository(),
        token_port=_get_token_service(),
    )


def get_change_password_use_case() -> ChangePasswordUseCase:
    return ChangePasswordUseCase(
        user_store=_get_users_repository(),
        password_hasher=_get_password_hasher(),
    )


def get_get_current_user_use_case() -> GetCurrentUserUseCase:
    return GetCurrentUserUseCase(user_store=_get_users_repository())


def get_update_account_details_use_case() -> UpdateAccountDetailsUseCase:
    return UpdateAccountDetailsUseCase(user_store=_get_users_repository())


def get_update_avatar_use_case() -> UpdateAvatarUseCase:
    return UpdateAvatarUseCase(
        user_store=_get_users_repository(),
        media_uploader=_get_media_uploader(),
    )


def get_update_cover_image_use_case() -> UpdateCoverImageUseCase:
    return UpdateCoverImageUseCase(
        user_store=_get_users_repository(),
        media_uploader=_get_media_uploader(),
    )


def get_get_channel_profile_use_case() -> GetChannelProfileUseCase:
    return GetChannelProfileUseCase(
        user_store=_get_users_repository(),
        subscriptions_port=_get_subscriptions_repository(),
    )


def extract_access_token(authorization: str | None, cookie_token: str | None) -> str | None:
    if cookie_token and cookie_token.strip():
        return cookie_token.strip()
    if authorization and authorization.startswith("Bearer "):
        token = authorization.replace("Bearer ", "", 1).strip()
        return token or None
    return None


def _resolve_user(token: str) -> User:
    payload = _get_token_service().decode_access_token(token=token)
    user = _get_users_repository().get_user_by_id(user_id=payload.user_id)
    if user is None:
        raise InvalidTokenError("Invalid access token.")
    return user


def get_current_user(
    authorization: str | None = Header(default=None),
    access_token_cookie: str | None = Cookie(default=None, alias=ACCESS_COOKIE_NAME),
) -> User:
    token = extract_access_token(authorization, access_token_cookie)
    if token is None:
        raise HTTPException(status_code=401, detail="Unauthorized request.")
    try:
        return _resolve_user(token)
    except InvalidTokenError as exc:
        raise HTTPException(status_code=401, detail="Invalid access token.") from exc


def get_optional_current_user(
    authorization: str | None = Header(default=None),
    access_token_cookie: str | None = Cookie(default=None, alias=ACCESS_COOKIE_NAME),
) -> User | None:
    token = extract_access_token(authorization, access_token_cookie)
    if token is None:
        return None
    try:
        return _resolve_user(token)
    except InvalidTokenError:
        logger.debug("deps: anonymous_viewer reason=invalid_access_token")
        return None
