from __future__ import annotations

import logging

import httpx

from identity_api.application.dto.auth import MediaAsset, UploadedMedia
from identity_api.application.ports.media_uploader_port import MediaUploaderPort
from identity_api.domain.exceptions import UnavailableError, UploadFailedError


logger = logging.getLogger(__name__)


class HttpMediaUploader(MediaUploaderPort):
    """Unsigned multipart upload to a Cloudinary-compatible media host."""

    def __init__(
        self,
        *,
        upload_url: str,
        upload_preset: str,
        timeout_seconds: float,
        transport: httpx.BaseTransport | None = None,
    ):
        self._upload_url = upload_url
        self._upload_preset = upload_preset
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    def upload(self, *, asset: MediaAsset) -> UploadedMedia:
        files = {
            "file": (asset.filename, asset.content, asset.content_type or "application/octet-stream"),
        }
        data = {"upload_preset": self._upload_preset} if self._upload_preset else {}

        try:
            with httpx.Client(timeout=self._timeout_seconds, transport=self._transport) as client:
                response = client.post(self._upload_url, data=data, files=files)
                response.raise_for_status()
                payload = response.json()
        except (httpx.TimeoutException, httpx.TransportError) as exc:
            logger.warning("media_uploader: unavailable filename=%s error=%s", asset.filename, exc)
            raise UnavailableError("Media host is unavailable.") from exc
        except (httpx.HTTPStatusError, ValueError) as exc:
            logger.warning("media_uploader: upload_failed filename=%s error=%s", asset.filename, exc)
            raise UploadFailedError("Media upload failed.") from exc

        if not isinstance(payload, dict):
            raise UploadFailedError("Media upload returned an unexpected payload.")
        url = payload.get("secure_url") or payload.get("url")
        if not url:
            raise UploadFailedError("Media upload did not return a URL.")

        logger.info("media_uploader: uploaded filename=%s bytes=%s", asset.filename, len(asset.content))
        return UploadedMedia(url=str(url))
