from __future__ import annotations

from datetime import datetime, timedelta
from uuid import uuid4

import jwt

from identity_api.application.dto.auth import AccessTokenPayload
from identity_api.application.ports.token_port import TokenPort
from identity_api.domain.entities.user import User
from identity_api.domain.exceptions import InvalidTokenError


ALGORITHM = "HS256"


class JwtTokenService(TokenPort):
    def __init__(
        self,
        *,
        access_token_secret: str,
        access_ttl_minutes: int,
        refresh_token_secret: str,
        refresh_ttl_days: int,
    ):
        if not access_token_secret or not refresh_token_secret:
            raise ValueError("Access and refresh token secrets are required.")
        if access_token_secret == refresh_token_secret:
            raise ValueError("Access and refresh token secrets must differ.")
        self._access_token_secret = access_token_secret
        self._access_ttl_minutes = access_ttl_minutes
        self._refresh_token_secret = refresh_token_secret
        self._refresh_ttl_days = refresh_ttl_days

    def create_access_token(self, *, user: User, now: datetime) -> tuple[str, datetime]:
        exp = now + timedelta(minutes=self._access_ttl_minutes)
        payload = {
            "sub": user.id,
            "type": "access",
            "username": user.username,
            "email": user.email,
            "full_name": user.full_name,
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
        }
        token = jwt.encode(payload, self._access_token_secret, algorithm=ALGORITHM)
        return token, exp

    def decode_access_token(self, *, token: str) -> AccessTokenPayload:
        payload = self._decode(token=token, secret=self._access_token_secret, token_type="access")
        return AccessTokenPayload(
            user_id=payload["sub"],
            username=str(payload.get("username", "")),
            email=str(payload.get("email", "")),
            full_name=str(payload.get("full_name", "")),
        )

    def create_refresh_token(self, *, user_id: str, now: datetime) -> tuple[str, datetime]:
        exp = now + timedelta(days=self._refresh_ttl_days)
        payload = {
            "sub": user_id,
            "type": "refresh",
            # Keeps two tokens minted in the same second distinct.
            "jti": uuid4().hex,
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
        }
        token = jwt.encode(payload, self._refresh_token_secret, algorithm=ALGORITHM)
        return token, exp

    def verify_refresh_token(self, *, token: str) -> str:
        payload = self._decode(token=token, secret=self._refresh_token_secret, token_type="refresh")
        return payload["sub"]

    def _decode(self, *, token: str, secret: str, token_type: str) -> dict:
        try:
            payload = jwt.decode(token, secret, algorithms=[ALGORITHM], options={"require": ["exp", "sub"]})
        except jwt.PyJWTError as exc:
            raise InvalidTokenError(f"Invalid {token_type} token.") from exc

        if payload.get("type") != token_type:
            raise InvalidTokenError("Invalid token type.")

        user_id = payload.get("sub")
        if not user_id or not isinstance(user_id, str):
            raise InvalidTokenError("Invalid token subject.")
        return payload
