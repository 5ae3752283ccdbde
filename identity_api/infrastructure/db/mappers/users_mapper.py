from __future__ import annotations

from typing import Any, Mapping

from identity_api.domain.entities.user import PublicUser, User


def _as_str(value: Any) -> str:
    return str(value)


def map_row_to_user(row: Mapping[str, Any]) -> User:
    return User(
        id=_as_str(row["id"]),
        username=row["username"],
        email=row["email"],
        full_name=row["full_name"],
        password_hash=row["password_hash"],
        avatar=row["avatar"],
        cover_image=row.get("cover_image") or "",
        refresh_token=row.get("refresh_token"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def map_row_to_public_user(row: Mapping[str, Any]) -> PublicUser:
    return PublicUser(
        id=_as_str(row["id"]),
        username=row["username"],
        email=row["email"],
        full_name=row["full_name"],
        avatar=row["avatar"],
        cover_image=row.get("cover_image") or "",
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
