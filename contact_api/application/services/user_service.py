"""Service for user registration, login and session management."""

from __future__ import annotations

import logging
from typing import Any

from ...domain.errors import ServiceError
from ...domain.models import User
from ...domain.ports.persistence import DuplicateKeyError, UserRepository
from ..security import PasswordHasher, TokenIssuer
from ..validation import UserValidation, ValidationService

logger = logging.getLogger(__name__)

USERNAME_TAKEN_MSG = "Username already exists"
INVALID_CREDENTIALS_MSG = "Username or password is invalid"


class UserService:
    """Orchestrates the account lifecycle on top of the credential store."""

    def __init__(
        self,
        user_repository: UserRepository,
        validation: ValidationService,
        hasher: PasswordHasher,
        token_issuer: TokenIssuer,
    ) -> None:
        self._users = user_repository
        self._validation = validation
        self._hasher = hasher
        self._tokens = token_issuer

    def register(self, payload: Any) -> User:
        """
        Register a new user without a session.

        Args:
            payload: Raw request body with username, password and name

        Returns:
            The created user

        Raises:
            ServiceError: VALIDATION on a malformed payload, CONFLICT if the username is taken
        """
        request = self._validation.validate(UserValidation.REGISTER, payload)
        logger.debug("Register new user %s", request.username)

        # Advisory only; the store's unique key decides races.
        if self._users.count_users_by_username(request.username) != 0:
            raise ServiceError.conflict(USERNAME_TAKEN_MSG)

        password_hash = self._hasher.hash(request.password)
        try:
            user = self._users.create_user(
                username=request.username,
                password_hash=password_hash,
                name=request.name,
            )
        except DuplicateKeyError as exc:
            raise ServiceError.conflict(USERNAME_TAKEN_MSG) from exc

        logger.info("Registered user %s", user.username)
        return user

    def login(self, payload: Any) -> User:
        """
        Authenticate with username and password and start a new session.

        The returned user carries the freshly issued token. Any token issued
        before is no longer valid.

        Raises:
            ServiceError: VALIDATION on a malformed payload, UNAUTHORIZED on bad credentials
        """
        request = self._validation.validate(UserValidation.LOGIN, payload)
        logger.debug("UserService.login(%s)", request.username)

        user = self._users.find_user_by_username(request.username)
        if not user:
            raise ServiceError.unauthorized(INVALID_CREDENTIALS_MSG)

        if not self._hasher.verify(request.password, user.password_hash):
            raise ServiceError.unauthorized(INVALID_CREDENTIALS_MSG)

        user = self._users.set_user_token(user.username, self._tokens.issue())
        logger.info("User %s logged in", user.username)
        return user

    def get(self, user: User) -> User:
        return user

    def update(self, user: User, payload: Any) -> User:
        """
        Apply a partial update to the authenticated user.

        Only ``name`` and ``password`` present in the payload are changed; the
        session token is left as is.
        """
        request = self._validation.validate(UserValidation.UPDATE, payload)
        logger.debug("UserService.update(%s, fields=%s)", user.username, sorted(request.model_fields_set))

        password_hash = None
        if request.password is not None:
            password_hash = self._hasher.hash(request.password)

        return self._users.update_user(
            user.username,
            name=request.name,
            password_hash=password_hash,
        )

    def logout(self, user: User) -> User:
        result = self._users.set_user_token(user.username, None)
        logger.info("User %s logged out", result.username)
        return result
