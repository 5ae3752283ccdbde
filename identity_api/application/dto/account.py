from __future__ import annotations

from dataclasses import dataclass

from identity_api.application.dto.auth import MediaAsset


@dataclass(frozen=True)
class ChangePasswordInput:
    user_id: str
    old_password: str | None
    new_password: str | None


@dataclass(frozen=True)
class UpdateAccountDetailsInput:
    user_id: str
    full_name: str | None
    email: str | None


@dataclass(frozen=True)
class UpdateUserMediaInput:
    user_id: str
    asset: MediaAsset | None
