from __future__ import annotations

from identity_api.application.ports.user_store_port import UserStorePort
from identity_api.domain.entities.user import PublicUser
from identity_api.domain.exceptions import NotFoundError


class GetCurrentUserUseCase:
    def __init__(self, *, user_store: UserStorePort):
        self._user_store = user_store

    def execute(self, *, user_id: str) -> PublicUser:
        user = self._user_store.get_public_user_by_id(user_id=user_id)
        if user is None:
            raise NotFoundError("User does not exist.")
        return user
