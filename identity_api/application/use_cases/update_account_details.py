from __future__ import annotations

from identity_api.application.dto.account import UpdateAccountDetailsInput
from identity_api.application.ports.user_store_port import UserStorePort
from identity_api.domain.entities.user import PublicUser
from identity_api.domain.exceptions import ConflictError, NotFoundError

from .auth_common import normalize_email, require_fields


class UpdateAccountDetailsUseCase:
    def __init__(self, *, user_store: UserStorePort):
        self._user_store = user_store

    def execute(self, command: UpdateAccountDetailsInput) -> PublicUser:
        require_fields("All fields are required.", command.full_name, command.email)
        full_name = command.full_name.strip()
        email = normalize_email(command.email)

        owner = self._user_store.find_user_by_username_or_email(username=None, email=email)
        if owner is not None and owner.id != command.user_id:
            raise ConflictError("Email already in use.")

        self._user_store.update_account_details(user_id=command.user_id, full_name=full_name, email=email)

        user = self._user_store.get_public_user_by_id(user_id=command.user_id)
        if user is None:
            raise NotFoundError("User does not exist.")
        return user
