from __future__ import annotations

from datetime import datetime
from typing import Protocol

from identity_api.domain.entities.user import PublicUser, User


class UserStorePort(Protocol):
    def get_user_by_id(self, *, user_id: str) -> User | None:
        ...

    def get_public_user_by_id(self, *, user_id: str) -> PublicUser | None:
        ...

    def get_public_user_by_username(self, *, username: str) -> PublicUser | None:
        ...

    def find_user_by_username_or_email(
        self,
        *,
        username: str | None,
        email: str | None,
    ) -> User | None:
        ...

    def create_user(
        self,
        *,
        user_id: str,
        username: str,
        email: str,
        full_name: str,
        password: str,
        avatar: str,
        cover_image: str,
        created_at: datetime,
    ) -> User:
        ...

    def set_refresh_token(self, *, user_id: str, refresh_token: str | None) -> None:
        ...

    def rotate_refresh_token(self, *, user_id: str, expected_token: str, new_token: str) -> bool:
        ...

    def update_password(self, *, user_id: str, password: str) -> None:
        ...

    def update_account_details(self, *, user_id: str, full_name: str, email: str) -> None:
        ...

    def update_avatar(self, *, user_id: str, avatar: str) -> None:
        ...

    def update_cover_image(self, *, user_id: str, cover_image: str) -> None:
        ...
