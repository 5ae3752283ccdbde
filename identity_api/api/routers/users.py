from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Body, Cookie, Depends, File, Form, Response, UploadFile

from identity_api.api.deps import (
    ACCESS_COOKIE_NAME,
    REFRESH_COOKIE_NAME,
    get_change_password_use_case,
    get_current_user,
    get_get_channel_profile_use_case,
    get_get_current_user_use_case,
    get_login_user_use_case,
    get_logout_user_use_case,
    get_optional_current_user,
    get_refresh_session_use_case,
    get_register_user_use_case,
    get_update_account_details_use_case,
    get_update_avatar_use_case,
    get_update_cover_image_use_case,
)
from identity_api.api.schemas.users import (
    AuthTokenResponse,
    ChangePasswordRequest,
    ChannelProfileResponse,
    EmptyResponse,
    LoginRequest,
    MessageResponse,
    PublicUserResponse,
    RefreshTokenRequest,
    SessionTokenResponse,
    UpdateAccountRequest,
    UserResponse,
)
from identity_api.application.dto.account import (
    ChangePasswordInput,
    UpdateAccountDetailsInput,
    UpdateUserMediaInput,
)
from identity_api.application.dto.auth import (
    LoginInput,
    LogoutInput,
    MediaAsset,
    RefreshSessionInput,
    RegisterUserInput,
)
from identity_api.application.dto.channel import GetChannelProfileInput
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
from identity_api.domain.entities.user import PublicUser, User
from identity_api.shared.config import get_settings


router = APIRouter()


def _cookie_max_age_seconds(expires_at: datetime) -> int:
    now = datetime.now(timezone.utc)
    return max(int((expires_at - now).total_seconds()), 0)


def _set_auth_cookies(
    response: Response,
    *,
    access_token: str,
    access_expires_at: datetime,
    refresh_token: str,
    refresh_expires_at: datetime,
) -> None:
    settings = get_settings()
    for key, value, expires_at in (
        (ACCESS_COOKIE_NAME, access_token, access_expires_at),
        (REFRESH_COOKIE_NAME, refresh_token, refresh_expires_at),
    ):
        response.set_cookie(
            key=key,
            value=value,
            httponly=True,
            samesite=settings.cookie_samesite,
            secure=settings.cookie_secure,
            max_age=_cookie_max_age_seconds(expires_at),
            path="/",
        )


def _clear_auth_cookies(response: Response) -> None:
    settings = get_settings()
    for key in (ACCESS_COOKIE_NAME, REFRESH_COOKIE_NAME):
        response.delete_cookie(
            key=key,
            path="/",
            httponly=True,
            samesite=settings.cookie_samesite,
            secure=settings.cookie_secure,
        )


def _to_media_asset(upload: UploadFile | None) -> MediaAsset | None:
    if upload is None:
        return None
    content = upload.file.read()
    if not content:
        return None
    return MediaAsset(
        filename=upload.filename or "upload",
        content_type=upload.content_type,
        content=content,
    )


def _user_response(user: PublicUser) -> PublicUserResponse:
    return PublicUserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        full_name=user.full_name,
        avatar=user.avatar,
        cover_image=user.cover_image,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


@router.post("/v1/users/register", response_model=UserResponse, status_code=201)
def register_user(
    full_name: str | None = Form(default=None),
    email: str | None = Form(default=None),
    username: str | None = Form(default=None),
    password: str | None = Form(default=None),
    avatar: UploadFile | None = File(default=None),
    cover_image: UploadFile | None = File(default=None),
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
):
    output = use_case.execute(
        RegisterUserInput(
            full_name=full_name,
            email=email,
            username=username,
            password=password,
            avatar=_to_media_asset(avatar),
            cover_image=_to_media_asset(cover_image),
        )
    )
    return UserResponse(user=_user_response(output.user))


@router.post("/v1/users/login", response_model=AuthTokenResponse)
def login_user(
    req: LoginRequest,
    response: Response,
    use_case: LoginUserUseCase = Depends(get_login_user_use_case),
):
    output = use_case.execute(
        LoginInput(
            username=req.username,
            email=req.email,
            password=req.password,
        )
    )
    _set_auth_cookies(
        response,
        access_token=output.access_token,
        access_expires_at=output.access_expires_at,
        refresh_token=output.refresh_token,
        refresh_expires_at=output.refresh_expires_at,
    )
    return AuthTokenResponse(
        access_token=output.access_token,
        refresh_token=output.refresh_token,
        access_expires_at=output.access_expires_at,
        refresh_expires_at=output.refresh_expires_at,
        user=_user_response(output.user),
    )


@router.post("/v1/users/logout", response_model=EmptyResponse)
def logout_user(
    response: Response,
    current_user: User = Depends(get_current_user),
    use_case: LogoutUserUseCase = Depends(get_logout_user_use_case),
):
    use_case.execute(LogoutInput(user_id=current_user.id))
    _clear_auth_cookies(response)
    return EmptyResponse()


@router.post("/v1/users/refresh-token", response_model=SessionTokenResponse)
def refresh_session(
    response: Response,
    req: RefreshTokenRequest | None = Body(default=None),
    refresh_token_cookie: str | None = Cookie(default=None, alias=REFRESH_COOKIE_NAME),
    use_case: RefreshSessionUseCase = Depends(get_refresh_session_use_case),
):
    presented = refresh_token_cookie or (req.refresh_token if req is not None else None)
    output = use_case.execute(RefreshSessionInput(refresh_token=presented))
    _set_auth_cookies(
        response,
        access_token=output.access_token,
        access_expires_at=output.access_expires_at,
        refresh_token=output.refresh_token,
        refresh_expires_at=output.refresh_expires_at,
    )
    return SessionTokenResponse(
        access_token=output.access_token,
        refresh_token=output.refresh_token,
        access_expires_at=output.access_expires_at,
        refresh_expires_at=output.refresh_expires_at,
    )


@router.post("/v1/users/change-password", response_model=MessageResponse)
def change_password(
    req: ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    use_case: ChangePasswordUseCase = Depends(get_change_password_use_case),
):
    use_case.execute(
        ChangePasswordInput(
            user_id=current_user.id,
            old_password=req.old_password,
            new_password=req.new_password,
        )
    )
    return MessageResponse(message="Password changed successfully.")


@router.get("/v1/users/me", response_model=UserResponse)
def get_me(
    current_user: User = Depends(get_current_user),
    use_case: GetCurrentUserUseCase = Depends(get_get_current_user_use_case),
):
    return UserResponse(user=_user_response(use_case.execute(user_id=current_user.id)))


@router.patch("/v1/users/me", response_model=UserResponse)
def update_account_details(
    req: UpdateAccountRequest,
    current_user: User = Depends(get_current_user),
    use_case: UpdateAccountDetailsUseCase = Depends(get_update_account_details_use_case),
):
    user = use_case.execute(
        UpdateAccountDetailsInput(
            user_id=current_user.id,
            full_name=req.full_name,
            email=req.email,
        )
    )
    return UserResponse(user=_user_response(user))


@router.patch("/v1/users/me/avatar", response_model=UserResponse)
def update_avatar(
    avatar: UploadFile | None = File(default=None),
    current_user: User = Depends(get_current_user),
    use_case: UpdateAvatarUseCase = Depends(get_update_avatar_use_case),
):
    user = use_case.execute(UpdateUserMediaInput(user_id=current_user.id, asset=_to_media_asset(avatar)))
    return UserResponse(user=_user_response(user))


@router.patch("/v1/users/me/cover-image", response_model=UserResponse)
def update_cover_image(
    cover_image: UploadFile | None = File(default=None),
    current_user: User = Depends(get_current_user),
    use_case: UpdateCoverImageUseCase = Depends(get_update_cover_image_use_case),
):
    user = use_case.execute(UpdateUserMediaInput(user_id=current_user.id, asset=_to_media_asset(cover_image)))
    return UserResponse(user=_user_response(user))


@router.get("/v1/users/channels/{username}", response_model=ChannelProfileResponse)
def get_channel_profile(
    username: str,
    viewer: User | None = Depends(get_optional_current_user),
    use_case: GetChannelProfileUseCase = Depends(get_get_channel_profile_use_case),
):
    profile = use_case.execute(
        GetChannelProfileInput(
            username=username,
            viewer_id=viewer.id if viewer is not None else None,
        )
    )
    return ChannelProfileResponse(
        full_name=profile.full_name,
        username=profile.username,
        email=profile.email,
        avatar=profile.avatar,
        cover_image=profile.cover_image,
        subscribers_count=profile.subscribers_count,
        subscribed_to_count=profile.subscribed_to_count,
        is_subscribed=profile.is_subscribed,
    )
