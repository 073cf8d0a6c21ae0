"""Signed session tokens.

Tokens are HS256 JWTs carrying the user id as ``sub`` plus ``iat``/``exp``.
The signing secret is handed to :class:`JwtTokenIssuer` by whoever builds it
(see ``hotelhub.infrastructure.container``); nothing here reads global state.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt

from hotelhub.domain.users.entities import SessionClaim, SessionToken
from hotelhub.domain.users.exceptions import InvalidTokenError, TokenSigningError
from hotelhub.domain.users.repositories import TokenIssuer
from hotelhub.shared.config.settings import TokenConfig

DEFAULT_TOKEN_TTL = timedelta(hours=24)
JWT_ALGORITHM = "HS256"


class JwtTokenIssuer(TokenIssuer):
    def __init__(
        self,
        *,
        secret: str,
        ttl: timedelta = DEFAULT_TOKEN_TTL,
        algorithm: str = JWT_ALGORITHM,
    ) -> None:
        self._secret = secret
        self._ttl = ttl
        self._algorithm = algorithm

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, user_id: str, *, now: datetime | None = None) -> SessionToken:
        claim = SessionClaim.issue(user_id, self._ttl, now=now)
        payload = {
            "sub": claim.user_id,
            "iat": int(claim.issued_at.timestamp()),
            "exp": int(claim.expires_at.timestamp()),
        }
        try:
            token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        except (jwt.PyJWTError, NotImplementedError, TypeError, ValueError) as exc:
            raise TokenSigningError() from exc
        return SessionToken(token=token, claim=claim)

    def decode(self, token: str) -> SessionClaim:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise InvalidTokenError(context={"reason": "token_expired"}) from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError(context={"reason": "token_invalid"}) from exc

        issued_at = payload.get("iat", payload["exp"] - int(self._ttl.total_seconds()))
        return SessionClaim(
            user_id=str(payload["sub"]),
            issued_at=datetime.fromtimestamp(issued_at, UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )


def build_token_issuer(config: TokenConfig) -> JwtTokenIssuer:
    return JwtTokenIssuer(
        secret=config.secret,
        ttl=timedelta(seconds=config.ttl_seconds),
        algorithm=config.algorithm,
    )
