# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property, partial

from sqlalchemy.engine import Engine
from sqlalchemy.orm import scoped_session

from hotelhub.application.services.password_hashing import build_password_hasher
from hotelhub.application.services.tokens import JwtTokenIssuer, build_token_issuer
from hotelhub.application.use_cases.users.authenticate_user import AuthenticateTokenUseCase
from hotelhub.application.use_cases.users.login_user import LoginUserUseCase
from hotelhub.application.use_cases.users.register_user import RegisterUserUseCase
from hotelhub.domain.users.repositories import PasswordHasher
from hotelhub.infrastructure.db import build_engine, build_session_factory
from hotelhub.infrastructure.health import check_database
from hotelhub.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from hotelhub.interfaces.http.controllers.auth_controller import AuthController, SessionCookie
from hotelhub.interfaces.http.controllers.misc_controller import MiscController
from hotelhub.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config

    @cached_property
    def config(self) -> AppConfig:
        return self._config or load_config()

    @cached_property
    def engine(self) -> Engine:
        return build_engine(self.config.database)

    @cached_property
    def session_factory(self) -> scoped_session:
        return build_session_factory(self.engine)

    @cached_property
    def password_hasher(self) -> PasswordHasher:
        return build_password_hasher(self.config.password)

    @cached_property
    def token_issuer(self) -> JwtTokenIssuer:
        return build_token_issuer(self.config.token)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            tokens=self.token_issuer,
        )

    @cached_property
    def authenticate_token_use_case(self) -> AuthenticateTokenUseCase:
        return AuthenticateTokenUseCase(users=self.user_repository, tokens=self.token_issuer)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            authenticate_use_case=self.authenticate_token_use_case,
            cookie=SessionCookie(
                name=self.config.token.cookie_name,
                secure=self.config.security.cookie_secure,
                samesite=self.config.security.cookie_samesite,
            ),
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(database_check=partial(check_database, self.engine))


container = Container()
