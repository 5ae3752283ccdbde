from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock

import pytest

from identity_api.application.dto.auth import MediaAsset, UploadedMedia
from identity_api.application.use_cases.auth_common import to_public_user
from identity_api.domain.entities.user import PublicUser, User
from identity_api.domain.exceptions import ConflictError
from identity_api.infrastructure.security.token_service import JwtTokenService


class FakePasswordHasher:
    def hash(self, plain_password: str) -> str:
        return f"hashed::{plain_password}"

    def verify(self, plain_password: str, password_hash: str) -> bool:
        return password_hash == f"hashed::{plain_password}"


class FakeUserStore:
    def __init__(self, password_hasher: FakePasswordHasher | None = None):
        self.users: dict[str, User] = {}
        self.password_hasher = password_hasher or FakePasswordHasher()
        self.hide_public_reads = False
        self.on_get_user_by_id = None
        self._lock = Lock()

    def get_user_by_id(self, *, user_id: str) -> User | None:
        user = self.users.get(user_id)
        if self.on_get_user_by_id is not None:
            self.on_get_user_by_id()
        return user

    def get_public_user_by_id(self, *, user_id: str) -> PublicUser | None:
        if self.hide_public_reads:
            return None
        user = self.users.get(user_id)
        return to_public_user(user) if user is not None else None

    def get_public_user_by_username(self, *, username: str) -> PublicUser | None:
        for user in self.users.values():
            if user.username == username.lower():
                return to_public_user(user)
        return None

    def find_user_by_username_or_email(self, *, username: str | None, email: str | None) -> User | None:
        for user in self.users.values():
            if username and user.username == username.lower():
                return user
            if email and user.email.lower() == email.lower():
                return user
        return None

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
        if self.find_user_by_username_or_email(username=username, email=email) is not None:
            raise ConflictError("User with email or username already exists.")
        user = User(
            id=user_id,
            username=username.lower(),
            email=email,
            full_name=full_name,
            password_hash=self.password_hasher.hash(password),
            avatar=avatar,
            cover_image=cover_image,
            refresh_token=None,
            created_at=created_at,
            updated_at=created_at,
        )
        self.users[user.id] = user
        return user

    def set_refresh_token(self, *, user_id: str, refresh_token: str | None) -> None:
        with self._lock:
            user = self.users.get(user_id)
            if user is not None:
                self.users[user_id] = replace(user, refresh_token=refresh_token)

    def rotate_refresh_token(self, *, user_id: str, expected_token: str, new_token: str) -> bool:
        with self._lock:
            user = self.users.get(user_id)
            if user is None or user.refresh_token != expected_token:
                return False
            self.users[user_id] = replace(user, refresh_token=new_token)
            return True

    def update_password(self, *, user_id: str, password: str) -> None:
        user = self.users[user_id]
        self.users[user_id] = replace(user, password_hash=self.password_hasher.hash(password))

    def update_account_details(self, *, user_id: str, full_name: str, email: str) -> None:
        user = self.users[user_id]
        self.users[user_id] = replace(user, full_name=full_name, email=email)

    def update_avatar(self, *, user_id: str, avatar: str) -> None:
        user = self.users[user_id]
        self.users[user_id] = replace(user, avatar=avatar)

    def update_cover_image(self, *, user_id: str, cover_image: str) -> None:
        user = self.users[user_id]
        self.users[user_id] = replace(user, cover_image=cover_image)

    def add_user(self, *, user_id: str, username: str, email: str, password: str = "secret-pass") -> User:
        return self.create_user(
            user_id=user_id,
            username=username,
            email=email,
            full_name=username.title(),
            password=password,
            avatar=f"https://media.example.com/{username}.png",
            cover_image="",
            created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        )


class FakeMediaUploader:
    def __init__(self):
        self.uploaded: list[str] = []
        self.failures: dict[str, Exception] = {}
        self.empty_urls: set[str] = set()

    def upload(self, *, asset: MediaAsset) -> UploadedMedia:
        if asset.filename in self.failures:
            raise self.failures[asset.filename]
        self.uploaded.append(asset.filename)
        if asset.filename in self.empty_urls:
            return UploadedMedia(url="")
        return UploadedMedia(url=f"https://media.example.com/{asset.filename}")


class FakeSubscriptions:
    def __init__(self, edges: list[tuple[str, str]] | None = None):
        self.edges = list(edges or [])

    def count_subscribers(self, *, channel_id: str) -> int:
        return sum(1 for _, channel in self.edges if channel == channel_id)

    def count_subscriptions(self, *, subscriber_id: str) -> int:
        return sum(1 for subscriber, _ in self.edges if subscriber == subscriber_id)

    def is_subscribed(self, *, subscriber_id: str, channel_id: str) -> bool:
        return (subscriber_id, channel_id) in self.edges


def _media(filename: str) -> MediaAsset:
    return MediaAsset(filename=filename, content_type="image/png", content=b"\x89PNG-bytes")


@pytest.fixture
def password_hasher() -> FakePasswordHasher:
    return FakePasswordHasher()


@pytest.fixture
def user_store(password_hasher) -> FakeUserStore:
    return FakeUserStore(password_hasher)


@pytest.fixture
def media_uploader() -> FakeMediaUploader:
    return FakeMediaUploader()


@pytest.fixture
def token_service() -> JwtTokenService:
    return JwtTokenService(
        access_token_secret="access-secret-for-tests-0123456789abcdef",
        access_ttl_minutes=15,
        refresh_token_secret="refresh-secret-for-tests-0123456789abcdef",
        refresh_ttl_days=10,
    )


@pytest.fixture
def make_media():
    return _media


@pytest.fixture
def make_subscriptions():
    return FakeSubscriptions
