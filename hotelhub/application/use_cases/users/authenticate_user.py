"""Use-case for resolving the user behind a session token."""

from __future__ import annotations

from hotelhub.domain.users.entities import User
from hotelhub.domain.users.exceptions import InvalidTokenError, UnauthorizedError
from hotelhub.domain.users.repositories import TokenIssuer, UserRepository
from hotelhub.shared.logging import logger


class AuthenticateTokenUseCase:
    def __init__(self, *, users: UserRepository, tokens: TokenIssuer) -> None:
        self._users = users
        self._tokens = tokens

    def execute(self, token: str) -> User:
        if not token:
            raise UnauthorizedError()

        try:
            claim = self._tokens.decode(token)
        except InvalidTokenError as exc:
            reason = (exc.context or {}).get("reason", "token_invalid")
            logger.warning(f"auth.token: rejected ({reason})")
            raise UnauthorizedError() from exc

        user = self._users.find_by_id(claim.user_id)
        if user is None:
            logger.warning(f"auth.token: unknown subject user_id={claim.user_id}")
            raise UnauthorizedError()
        return user
