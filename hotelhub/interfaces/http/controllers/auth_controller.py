# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeVar

from flask import Blueprint, Response, g, jsonify, request
from pydantic import BaseModel, ValidationError

from hotelhub.application.use_cases.users.authenticate_user import AuthenticateTokenUseCase
from hotelhub.application.use_cases.users.login_user import LoginUserUseCase
from hotelhub.application.use_cases.users.register_user import RegisterUserUseCase
from hotelhub.interfaces.http.auth import auth_required
from hotelhub.interfaces.http.dto.auth import (
    LoginRequestDTO,
    LoginResponseDTO,
    RegisterRequestDTO,
    UserResponseDTO,
)
from hotelhub.shared.errors.validation import raise_validation_error
from hotelhub.shared.logging import logger

DTO = TypeVar("DTO", bound=BaseModel)


@dataclass(slots=True, frozen=True)
class SessionCookie:
    name: str = "token"
    secure: bool = False
    samesite: str = "Lax"


def _parse_body(dto_type: type[DTO]) -> DTO:
    # silent=True turns undecodable JSON into None, which then fails validation
    payload = request.get_json(silent=True)
    try:
        return dto_type.model_validate(payload)
    except ValidationError as exc:
        logger.warning(f"Failed to decode request body on {request.method} {request.path}")
        raise_validation_error(exc)


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        authenticate_use_case: AuthenticateTokenUseCase,
        cookie: SessionCookie | None = None,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._authenticate_use_case = authenticate_use_case
        self._cookie = cookie or SessionCookie()

    def register(self) -> tuple[Response, int]:
        dto = _parse_body(RegisterRequestDTO)

        user = self._register_use_case.execute(dto.to_credentials())

        payload = UserResponseDTO.from_entity(user).model_dump(mode="json", by_alias=True)
        logger.info(f"auth.register: created user_id={user.id}")
        return jsonify(payload), 201

    def login(self) -> tuple[Response, int]:
        dto = _parse_body(LoginRequestDTO)

        result = self._login_use_case.execute(dto.to_credentials())

        payload = LoginResponseDTO(
            user_id=result.user.id, token=result.session.token
        ).model_dump(by_alias=True)
        response = jsonify(payload)
        response.set_cookie(
            self._cookie.name,
            result.session.token,
            expires=result.session.expires_at,
            path="/",
            httponly=True,
            samesite=self._cookie.samesite,
            secure=self._cookie.secure,
        )
        logger.info(f"auth.login: session issued user_id={result.user.id}")
        return response, 200

    def me(self) -> tuple[Response, int]:
        payload = UserResponseDTO.from_entity(g.current_user).model_dump(
            mode="json", by_alias=True
        )
        return jsonify(payload), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule(
            "/me",
            view_func=auth_required(
                self._authenticate_use_case, cookie_name=self._cookie.name
            )(self.me),
            methods=["GET"],
        )
        return bp
