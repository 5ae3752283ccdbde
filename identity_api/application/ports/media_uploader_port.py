from __future__ import annotations

from typing import Protocol

from identity_api.application.dto.auth import MediaAsset, UploadedMedia


class MediaUploaderPort(Protocol):
    def upload(self, *, asset: MediaAsset) -> UploadedMedia:
        ...
