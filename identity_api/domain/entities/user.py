from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class User:
    id: str
    username: str
    email: str
    full_name: str
    password_hash: str
    avatar: str
    cover_image: str
    refresh_token: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class PublicUser:
    id: str
    username: str
    email: str
    full_name: str
    avatar: str
    cover_image: str
    created_at: datetime
    updated_at: datetime
