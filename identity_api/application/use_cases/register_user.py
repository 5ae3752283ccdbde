from __future__ import annotations

import logging
from uuid import uuid4

from identity_api.application.dto.auth import MediaAsset, RegisterUserInput, RegisterUserOutput
from identity_api.application.ports.media_uploader_port import MediaUploaderPort
from identity_api.application.ports.user_store_port import UserStorePort
from identity_api.domain.exceptions import (
    ConflictError,
    InternalError,
    UnavailableError,
    UploadFailedError,
    ValidationError,
)

from .auth_common import normalize_email, normalize_username, require_fields, utcnow


logger = logging.getLogger(__name__)


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        user_store: UserStorePort,
        media_uploader: MediaUploaderPort,
    ):
        self._user_store = user_store
        self._media_uploader = media_uploader

    def execute(self, command: RegisterUserInput) -> RegisterUserOutput:
        require_fields(
            "All fields are required.",
            command.full_name,
            command.email,
            command.username,
            command.password,
        )
        full_name = command.full_name.strip()
        email = normalize_email(command.email)
        username = normalize_username(command.username)

        existing = self._user_store.find_user_by_username_or_email(username=username, email=email)
        if existing is not None:
            raise ConflictError("User with email or username already exists.")

        if command.avatar is None or not command.avatar.content:
            raise ValidationError("Avatar file is required.")

        avatar = self._media_uploader.upload(asset=command.avatar)
        if not avatar.url:
            raise UploadFailedError("Avatar upload did not return a URL.")
        cover_image_url = self._upload_cover_image(command.cover_image)

        try:
            user = self._user_store.create_user(
                user_id=str(uuid4()),
                username=username,
                email=email,
                full_name=full_name,
                password=command.password,
                avatar=avatar.url,
                cover_image=cover_image_url,
                created_at=utcnow(),
            )
        except ConflictError:
            logger.warning(
                "register_user: orphaned_media username=%s avatar=%s cover_image=%s",
                username,
                avatar.url,
                cover_image_url or "-",
            )
            raise

        created = self._user_store.get_public_user_by_id(user_id=user.id)
        if created is None:
            raise InternalError("Something went wrong while registering the user.")

        logger.info("register_user: created user_id=%s username=%s", created.id, created.username)
        return RegisterUserOutput(user=created)

    def _upload_cover_image(self, asset: MediaAsset | None) -> str:
        if asset is None or not asset.content:
            return ""
        try:
            uploaded = self._media_uploader.upload(asset=asset)
        except (UploadFailedError, UnavailableError) as exc:
            logger.warning("register_user: cover_image_upload_failed error=%s", exc)
            return ""
        return uploaded.url or ""
