# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .users.entities import Credentials, SessionClaim, SessionToken, User
from .users.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    UnauthorizedError,
    UserAlreadyExistsError,
)
from .users.repositories import PasswordHasher, TokenIssuer, UserRepository

__all__ = [
    "Credentials",
    "SessionClaim",
    "SessionToken",
    "User",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "UnauthorizedError",
    "UserAlreadyExistsError",
    "PasswordHasher",
    "TokenIssuer",
    "UserRepository",
]
