from __future__ import annotations

from datetime import datetime
from typing import Protocol

from identity_api.application.dto.auth import AccessTokenPayload
from identity_api.domain.entities.user import User


class TokenPort(Protocol):
    def create_access_token(self, *, user: User, now: datetime) -> tuple[str, datetime]:
        ...

    def decode_access_token(self, *, token: str) -> AccessTokenPayload:
        ...

    def create_refresh_token(self, *, user_id: str, now: datetime) -> tuple[str, datetime]:
        ...

    def verify_refresh_token(self, *, token: str) -> str:
        ...
