# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from hotelhub.domain.users.entities import Credentials, SessionToken, User
from hotelhub.domain.users.exceptions import InvalidCredentialsError, TokenSigningError
from hotelhub.domain.users.repositories import PasswordHasher, TokenIssuer, UserRepository
from hotelhub.shared.logging import logger


@dataclass(slots=True, frozen=True)
class LoginResult:
    user: User
    session: SessionToken


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
        tokens: TokenIssuer,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._tokens = tokens

    def execute(self, credentials: Credentials) -> LoginResult:
        user = self._users.find_by_email(credentials.email)
        if user is None:
            logger.warning("auth.login: user not found")
            raise InvalidCredentialsError()

        if not self._password_hasher.verify(credentials.password, user.password_hash):
            logger.warning(f"auth.login: invalid password user_id={user.id}")
            raise InvalidCredentialsError()

        try:
            session = self._tokens.issue(user.id)
        except TokenSigningError:
            logger.error(f"auth.login: failed to sign token user_id={user.id}")
            raise

        logger.info(
            f"auth.login: ok user_id={user.id} expires_at={session.expires_at.isoformat()}"
        )
        return LoginResult(user=user, session=session)
