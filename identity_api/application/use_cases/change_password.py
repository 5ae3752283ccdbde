from __future__ import annotations

import logging

from identity_api.application.dto.account import ChangePasswordInput
from identity_api.application.ports.password_hasher_port import PasswordHasherPort
from identity_api.application.ports.user_store_port import UserStorePort
from identity_api.domain.exceptions import InvalidOldPasswordError, NotFoundError

from .auth_common import require_fields


logger = logging.getLogger(__name__)


class ChangePasswordUseCase:
    def __init__(self, *, user_store: UserStorePort, password_hasher: PasswordHasherPort):
        self._user_store = user_store
        self._password_hasher = password_hasher

    def execute(self, command: ChangePasswordInput) -> None:
        require_fields("old_password and new_password are required.", command.old_password, command.new_password)

        user = self._user_store.get_user_by_id(user_id=command.user_id)
        if user is None:
            raise NotFoundError("User does not exist.")

        if not self._password_hasher.verify(command.old_password, user.password_hash):
            raise InvalidOldPasswordError("Invalid old password.")

        self._user_store.update_password(user_id=user.id, password=command.new_password)
        logger.info("change_password: updated user_id=%s", user.id)
