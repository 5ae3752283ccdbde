from __future__ import annotations

import logging

from identity_api.application.dto.auth import LogoutInput
from identity_api.application.ports.user_store_port import UserStorePort


logger = logging.getLogger(__name__)


class LogoutUserUseCase:
    def __init__(self, *, user_store: UserStorePort):
        self._user_store = user_store

    def execute(self, command: LogoutInput) -> None:
        self._user_store.set_refresh_token(user_id=command.user_id, refresh_token=None)
        logger.info("logout_user: session_cleared user_id=%s", command.user_id)
