# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .use_cases.users.authenticate_user import AuthenticateTokenUseCase
from .use_cases.users.login_user import LoginResult, LoginUserUseCase
from .use_cases.users.register_user import RegisterUserUseCase

__all__ = [
    "AuthenticateTokenUseCase",
    "LoginResult",
    "LoginUserUseCase",
    "RegisterUserUseCase",
]
