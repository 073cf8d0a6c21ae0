from __future__ import annotations

import os
import tempfile

# Configuration is read once at import time, so the environment has to be in
# place before anything from hotelhub is imported.
_TMP_DIR = tempfile.mkdtemp(prefix="hotelhub-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["LOG_FILE"] = os.path.join(_TMP_DIR, "app.log")
os.environ["JWT_SECRET"] = "test-secret-0123456789abcdef0123456789abcdef"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"
os.environ["APP_ENV"] = "test"

from datetime import UTC, datetime  # noqa: E402

import pytest  # noqa: E402

from hotelhub.domain.users.entities import User  # noqa: E402
from hotelhub.domain.users.exceptions import UserAlreadyExistsError  # noqa: E402
from hotelhub.domain.users.repositories import PasswordHasher, UserRepository  # noqa: E402

TEST_SECRET = os.environ["JWT_SECRET"]


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._seq = 1

    def find_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def find_by_id(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def add(self, *, email: str, username: str, password_hash: str) -> User:
        if self.find_by_email(email) is not None:
            raise UserAlreadyExistsError()
        user = User(
            id=f"user-{self._seq}",
            email=email,
            username=username,
            password_hash=password_hash,
            created_at=datetime.now(UTC),
        )
        self._seq += 1
        self._users[user.id] = user
        return user

    def __len__(self) -> int:
        return len(self._users)


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()
