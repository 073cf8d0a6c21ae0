# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from http import HTTPStatus
from typing import Any

from hotelhub.shared.errors.base import DomainError, InfrastructureError


class UserAlreadyExistsError(DomainError):
    code = "user_already_exists"
    status = HTTPStatus.CONFLICT


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED


class UnauthorizedError(DomainError):
    code = "unauthorized"
    status = HTTPStatus.UNAUTHORIZED


class InvalidTokenError(UnauthorizedError):
    pass


class PasswordHashingError(InfrastructureError):
    def __init__(self, *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__("password_hashing_failed", context=context)


class UserStorageError(InfrastructureError):
    def __init__(self, *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__("storage_error", context=context)


class UserCreationError(InfrastructureError):
    def __init__(self) -> None:
        super().__init__("user_create_failed")


class TokenSigningError(InfrastructureError):
    def __init__(self) -> None:
        super().__init__("login_failed")
