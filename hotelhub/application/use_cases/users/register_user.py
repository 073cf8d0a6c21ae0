# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from hotelhub.domain.users.entities import Credentials, User
from hotelhub.domain.users.exceptions import (
    PasswordHashingError,
    UserAlreadyExistsError,
    UserCreationError,
    UserStorageError,
)
from hotelhub.domain.users.repositories import PasswordHasher, UserRepository
from hotelhub.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, credentials: Credentials) -> User:
        # Uniqueness of the email is left to storage.
        try:
            hashed = self._password_hasher.hash(credentials.password)
        except PasswordHashingError as exc:
            logger.error(f"auth.register: failed to hash password ({exc.context})")
            raise UserCreationError() from exc

        try:
            user = self._users.add(
                email=credentials.email,
                username=credentials.username or "",
                password_hash=hashed,
            )
        except UserAlreadyExistsError as exc:
            logger.error("auth.register: failed to create user, email already registered")
            raise UserCreationError() from exc
        except UserStorageError as exc:
            logger.error(f"auth.register: failed to create user in database ({exc.context})")
            raise UserCreationError() from exc

        logger.info(f"auth.register: ok user_id={user.id}")
        return user
