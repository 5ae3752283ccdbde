from __future__ import annotations

from datetime import datetime

from sqlalchemy import text

from identity_api.application.ports.password_hasher_port import PasswordHasherPort
from identity_api.application.ports.user_store_port import UserStorePort
from identity_api.infrastructure.db.errors import translate_storage_errors
from identity_api.infrastructure.db.mappers.users_mapper import map_row_to_public_user, map_row_to_user


PUBLIC_COLUMNS = "id, username, email, full_name, avatar, cover_image, created_at, updated_at"
USER_COLUMNS = f"{PUBLIC_COLUMNS}, password_hash, refresh_token"


class SqlUsersRepository(UserStorePort):
    """Credential store backed by ``public.users``.

    Passwords arrive in plain text and are hashed here before they are written,
    so no caller ever handles a hash it did not read back.
    """

    def __init__(self, engine, *, password_hasher: PasswordHasherPort):
        self._engine = engine
        self._password_hasher = password_hasher

    def get_user_by_id(self, *, user_id: str):
        sql = f"""
            SELECT {USER_COLUMNS}
            FROM public.users
            WHERE id = :user_id
            LIMIT 1
        """
        with translate_storage_errors("get_user_by_id"), self._engine.connect() as conn:
            row = conn.execute(text(sql), {"user_id": user_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_user(row)

    def get_public_user_by_id(self, *, user_id: str):
        sql = f"""
            SELECT {PUBLIC_COLUMNS}
            FROM public.users
            WHERE id = :user_id
            LIMIT 1
        """
        with translate_storage_errors("get_public_user_by_id"), self._engine.connect() as conn:
            row = conn.execute(text(sql), {"user_id": user_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_public_user(row)

    def get_public_user_by_username(self, *, username: str):
        sql = f"""
            SELECT {PUBLIC_COLUMNS}
            FROM public.users
            WHERE username = :username
            LIMIT 1
        """
        with translate_storage_errors("get_public_user_by_username"), self._engine.connect() as conn:
            row = conn.execute(text(sql), {"username": username.lower()}).mappings().first()
        if row is None:
            return None
        return map_row_to_public_user(row)

    def find_user_by_username_or_email(self, *, username: str | None, email: str | None):
        conditions = []
        params = {}
        if username:
            conditions.append("username = :username")
            params["username"] = username.lower()
        if email:
            conditions.append("email = :email")
            params["email"] = email.lower()
        if not conditions:
            return None

        sql = f"""
            SELECT {USER_COLUMNS}
            FROM public.users
            WHERE {" OR ".join(conditions)}
            LIMIT 1
        """
        with translate_storage_errors("find_user_by_username_or_email"), self._engine.connect() as conn:
            row = conn.execute(text(sql), params).mappings().first()
        if row is None:
            return None
        return map_row_to_user(row)

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
    ):
        sql = f"""
            INSERT INTO public.users (
                id, username, email, full_name, password_hash, avatar, cover_image,
                refresh_token, created_at, updated_at
            ) VALUES (
                :id, :username, :email, :full_name, :password_hash, :avatar, :cover_image,
                NULL, :created_at, :created_at
            )
            RETURNING {USER_COLUMNS}
        """
        params = {
            "id": user_id,
            "username": username.lower(),
            "email": email,
            "full_name": full_name,
            "password_hash": self._password_hasher.hash(password),
            "avatar": avatar,
            "cover_image": cover_image,
            "created_at": created_at,
        }
        with translate_storage_errors("create_user"), self._engine.begin() as conn:
            row = conn.execute(text(sql), params).mappings().one()
        return map_row_to_user(row)

    def set_refresh_token(self, *, user_id: str, refresh_token: str | None) -> None:
        sql = """
            UPDATE public.users
            SET refresh_token = :refresh_token,
                updated_at = now()
            WHERE id = :user_id
        """
        with translate_storage_errors("set_refresh_token"), self._engine.begin() as conn:
            conn.execute(text(sql), {"user_id": user_id, "refresh_token": refresh_token})

    def rotate_refresh_token(self, *, user_id: str, expected_token: str, new_token: str) -> bool:
        sql = """
            UPDATE public.users
            SET refresh_token = :new_token,
                updated_at = now()
            WHERE id = :user_id
              AND refresh_token = :expected_token
        """
        with translate_storage_errors("rotate_refresh_token"), self._engine.begin() as conn:
            result = conn.execute(
                text(sql),
                {
                    "user_id": user_id,
                    "expected_token": expected_token,
                    "new_token": new_token,
                },
            )
        return result.rowcount == 1

    def update_password(self, *, user_id: str, password: str) -> None:
        sql = """
            UPDATE public.users
            SET password_hash = :password_hash,
                updated_at = now()
            WHERE id = :user_id
        """
        with translate_storage_errors("update_password"), self._engine.begin() as conn:
            conn.execute(
                text(sql),
                {
                    "user_id": user_id,
                    "password_hash": self._password_hasher.hash(password),
                },
            )

    def update_account_details(self, *, user_id: str, full_name: str, email: str) -> None:
        sql = """
            UPDATE public.users
            SET full_name = :full_name,
                email = :email,
                updated_at = now()
            WHERE id = :user_id
        """
        with translate_storage_errors("update_account_details"), self._engine.begin() as conn:
            conn.execute(text(sql), {"user_id": user_id, "full_name": full_name, "email": email})

    def update_avatar(self, *, user_id: str, avatar: str) -> None:
        sql = """
            UPDATE public.users
            SET avatar = :avatar,
                updated_at = now()
            WHERE id = :user_id
        """
        with translate_storage_errors("update_avatar"), self._engine.begin() as conn:
            conn.execute(text(sql), {"user_id": user_id, "avatar": avatar})

    def update_cover_image(self, *, user_id: str, cover_image: str) -> None:
        sql = """
            UPDATE public.users
            SET cover_image = :cover_image,
                updated_at = now()
            WHERE id = :user_id
        """
        with translate_storage_errors("update_cover_image"), self._engine.begin() as conn:
            conn.execute(text(sql), {"user_id": user_id, "cover_image": cover_image})
