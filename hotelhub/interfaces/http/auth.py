# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from flask import g, request

from hotelhub.application.use_cases.users.authenticate_user import AuthenticateTokenUseCase
from hotelhub.domain.users.exceptions import UnauthorizedError
from hotelhub.shared.logging import logger

F = TypeVar("F", bound=Callable[..., Any])

DEFAULT_COOKIE_NAME = "token"


def extract_token(cookie_name: str = DEFAULT_COOKIE_NAME) -> str:
    """Bearer token from the Authorization header, falling back to the session cookie."""
    auth = request.headers.get("Authorization", "")
    if auth[:7].lower() == "bearer ":
        token = auth[7:].strip()
        if token:
            return token
    return request.cookies.get(cookie_name, "")


def auth_required(
    authenticate: AuthenticateTokenUseCase,
    *,
    cookie_name: str = DEFAULT_COOKIE_NAME,
) -> Callable[[F], F]:
    def decorator(f: F) -> F:
        @wraps(f)
        def inner(*a, **kw):
            token = extract_token(cookie_name)
            if not token:
                logger.warning(
                    f"No Authorization header/cookie on {request.method} {request.path} "
                    f"from {request.headers.get('X-Forwarded-For', request.remote_addr)}"
                )
                raise UnauthorizedError()

            user = authenticate.execute(token)
            g.user_id = user.id
            g.current_user = user
            return f(*a, **kw)

        return inner  # type: ignore[return-value]

    return decorator


__all__ = ["auth_required", "extract_token"]
