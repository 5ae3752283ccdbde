from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str | None = Field(default=None, max_length=120)
    email: str | None = Field(default=None, max_length=255)
    password: str | None = Field(default=None, max_length=256)


class RefreshTokenRequest(BaseModel):
    refresh_token: str | None = None


class ChangePasswordRequest(BaseModel):
    old_password: str | None = Field(default=None, max_length=256)
    new_password: str | None = Field(default=None, max_length=256)


class UpdateAccountRequest(BaseModel):
    full_name: str | None = Field(default=None, max_length=120)
    email: str | None = Field(default=None, max_length=255)


class PublicUserResponse(BaseModel):
    id: str
    username: str
    email: str
    full_name: str
    avatar: str
    cover_image: str
    created_at: datetime
    updated_at: datetime


class UserResponse(BaseModel):
    user: PublicUserResponse


class SessionTokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    access_expires_at: datetime
    refresh_expires_at: datetime


class AuthTokenResponse(SessionTokenResponse):
    user: PublicUserResponse


class MessageResponse(BaseModel):
    message: str


class EmptyResponse(BaseModel):
    pass


class ChannelProfileResponse(BaseModel):
    full_name: str
    username: str
    email: str
    avatar: str
    cover_image: str
    subscribers_count: int
    subscribed_to_count: int
    is_subscribed: bool
