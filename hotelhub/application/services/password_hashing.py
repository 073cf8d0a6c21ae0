"""Password hashing strategies."""

from __future__ import annotations

import bcrypt
from werkzeug.security import check_password_hash, generate_password_hash

from hotelhub.domain.users.exceptions import PasswordHashingError
from hotelhub.domain.users.repositories import PasswordHasher
from hotelhub.shared.config.settings import PasswordConfig

DEFAULT_BCRYPT_ROUNDS = 10


class BcryptPasswordHasher(PasswordHasher):
    """Salted bcrypt hashes; ``rounds`` is the log2 work factor."""

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        try:
            salt = bcrypt.gensalt(rounds=self._rounds)
            return bcrypt.hashpw(password.encode("utf-8"), salt).decode("ascii")
        except ValueError as exc:
            raise PasswordHashingError(context={"algorithm": "bcrypt"}) from exc

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return bool(bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8")))
        except ValueError:
            # malformed stored hash or over-long password
            return False


class WerkzeugPasswordHasher(PasswordHasher):
    def __init__(self, method: str = "pbkdf2:sha256:600000") -> None:
        self._method = method

    def hash(self, password: str) -> str:
        try:
            return str(generate_password_hash(password, method=self._method))
        except ValueError as exc:
            raise PasswordHashingError(context={"algorithm": "werkzeug"}) from exc

    def verify(self, password: str, hashed: str) -> bool:
        return bool(check_password_hash(hashed, password))


def build_password_hasher(config: PasswordConfig) -> PasswordHasher:
    if config.hasher == "werkzeug":
        return WerkzeugPasswordHasher(method=config.method)
    return BcryptPasswordHasher(rounds=config.rounds)
