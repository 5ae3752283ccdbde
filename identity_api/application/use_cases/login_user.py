from __future__ import annotations

import logging

from identity_api.application.dto.auth import AuthTokensOutput, LoginInput
from identity_api.application.ports.password_hasher_port import PasswordHasherPort
from identity_api.application.ports.token_port import TokenPort
from identity_api.application.ports.user_store_port import UserStorePort
from identity_api.domain.exceptions import InvalidCredentialsError, NotFoundError, ValidationError

from .auth_common import is_blank, issue_tokens, normalize_email, normalize_username


logger = logging.getLogger(__name__)


class LoginUserUseCase:
    def __init__(
        self,
        *,
        user_store: UserStorePort,
        password_hasher: PasswordHasherPort,
        token_port: TokenPort,
    ):
        self._user_store = user_store
        self._password_hasher = password_hasher
        self._token_port = token_port

    def execute(self, command: LoginInput) -> AuthTokensOutput:
        username = None if is_blank(command.username) else normalize_username(command.username)
        email = None if is_blank(command.email) else normalize_email(command.email)
        if username is None and email is None:
            raise ValidationError("username or email is required.")
        if is_blank(command.password):
            raise ValidationError("password is required.")

        user = self._user_store.find_user_by_username_or_email(username=username, email=email)
        if user is None:
            raise NotFoundError("User does not exist.")

        if not self._password_hasher.verify(command.password, user.password_hash):
            raise InvalidCredentialsError("Invalid user credentials.")

        output = issue_tokens(user=user, user_store=self._user_store, token_port=self._token_port)
        logger.info("login_user: session_started user_id=%s", user.id)
        return output
