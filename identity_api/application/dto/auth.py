from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from identity_api.domain.entities.user import PublicUser


@dataclass(frozen=True)
class MediaAsset:
    filename: str
    content_type: str | None
    content: bytes


@dataclass(frozen=True)
class UploadedMedia:
    url: str


@dataclass(frozen=True)
class RegisterUserInput:
    full_name: str | None
    email: str | None
    username: str | None
    password: str | None
    avatar: MediaAsset | None
    cover_image: MediaAsset | None


@dataclass(frozen=True)
class RegisterUserOutput:
    user: PublicUser


@dataclass(frozen=True)
class LoginInput:
    username: str | None
    email: str | None
    password: str | None


@dataclass(frozen=True)
class RefreshSessionInput:
    refresh_token: str | None


@dataclass(frozen=True)
class LogoutInput:
    user_id: str


@dataclass(frozen=True)
class SessionTokensOutput:
    access_token: str
    refresh_token: str
    access_expires_at: datetime
    refresh_expires_at: datetime


@dataclass(frozen=True)
class AuthTokensOutput:
    user: PublicUser
    access_token: str
    refresh_token: str
    access_expires_at: datetime
    refresh_expires_at: datetime


@dataclass(frozen=True)
class AccessTokenPayload:
    user_id: str
    username: str
    email: str
    full_name: str
