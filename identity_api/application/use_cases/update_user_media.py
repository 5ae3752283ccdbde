from __future__ import annotations

import logging

from identity_api.application.dto.account import UpdateUserMediaInput
from identity_api.application.dto.auth import MediaAsset
from identity_api.application.ports.media_uploader_port import MediaUploaderPort
from identity_api.application.ports.user_store_port import UserStorePort
from identity_api.domain.entities.user import PublicUser
from identity_api.domain.exceptions import NotFoundError, UploadFailedError, ValidationError


logger = logging.getLogger(__name__)


def _upload_required(media_uploader: MediaUploaderPort, asset: MediaAsset | None, label: str) -> str:
    if asset is None or not asset.content:
        raise ValidationError(f"{label} file is missing.")
    uploaded = media_uploader.upload(asset=asset)
    if not uploaded.url:
        raise UploadFailedError(f"Error while uploading {label.lower()}.")
    return uploaded.url


def _reload(user_store: UserStorePort, user_id: str) -> PublicUser:
    user = user_store.get_public_user_by_id(user_id=user_id)
    if user is None:
        raise NotFoundError("User does not exist.")
    return user


class UpdateAvatarUseCase:
    def __init__(self, *, user_store: UserStorePort, media_uploader: MediaUploaderPort):
        self._user_store = user_store
        self._media_uploader = media_uploader

    def execute(self, command: UpdateUserMediaInput) -> PublicUser:
        url = _upload_required(self._media_uploader, command.asset, "Avatar")
        self._user_store.update_avatar(user_id=command.user_id, avatar=url)
        logger.info("update_user_media: avatar_updated user_id=%s", command.user_id)
        return _reload(self._user_store, command.user_id)


class UpdateCoverImageUseCase:
    def __init__(self, *, user_store: UserStorePort, media_uploader: MediaUploaderPort):
        self._user_store = user_store
        self._media_uploader = media_uploader

    def execute(self, command: UpdateUserMediaInput) -> PublicUser:
        url = _upload_required(self._media_uploader, command.asset, "Cover image")
        self._user_store.update_cover_image(user_id=command.user_id, cover_image=url)
        logger.info("update_user_media: cover_image_updated user_id=%s", command.user_id)
        return _reload(self._user_store, command.user_id)
