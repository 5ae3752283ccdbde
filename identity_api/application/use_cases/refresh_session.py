from __future__ import annotations

import logging

from identity_api.application.dto.auth import RefreshSessionInput, SessionTokensOutput
from identity_api.application.ports.token_port import TokenPort
from identity_api.application.ports.user_store_port import UserStorePort
from identity_api.domain.exceptions import InvalidTokenError, TokenReuseError, UnauthorizedError

from .auth_common import utcnow


logger = logging.getLogger(__name__)


class RefreshSessionUseCase:
    def __init__(self, *, user_store: UserStorePort, token_port: TokenPort):
        self._user_store = user_store
        self._token_port = token_port

    def execute(self, command: RefreshSessionInput) -> SessionTokensOutput:
        token = (command.refresh_token or "").strip()
        if not token:
            raise UnauthorizedError("Unauthorized request.")

        user_id = self._token_port.verify_refresh_token(token=token)

        user = self._user_store.get_user_by_id(user_id=user_id)
        if user is None:
            raise InvalidTokenError("Invalid refresh token.")

        if user.refresh_token != token:
            logger.warning("refresh_session: superseded_token_presented user_id=%s", user.id)
            raise TokenReuseError("Refresh token is expired or used.")

        now = utcnow()
        access_token, access_expires_at = self._token_port.create_access_token(user=user, now=now)
        refresh_token, refresh_expires_at = self._token_port.create_refresh_token(user_id=user.id, now=now)

        rotated = self._user_store.rotate_refresh_token(
            user_id=user.id,
            expected_token=token,
            new_token=refresh_token,
        )
        if not rotated:
            logger.warning("refresh_session: lost_rotation_race user_id=%s", user.id)
            raise TokenReuseError("Refresh token is expired or used.")

        logger.info("refresh_session: rotated user_id=%s", user.id)
        return SessionTokensOutput(
            access_token=access_token,
            refresh_token=refresh_token,
            access_expires_at=access_expires_at,
            refresh_expires_at=refresh_expires_at,
        )
