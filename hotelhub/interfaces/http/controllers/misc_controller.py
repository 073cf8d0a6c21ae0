# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from flask import Blueprint, jsonify
from sqlalchemy.exc import SQLAlchemyError

from hotelhub.shared.logging import logger

_MAX_ERROR_TEXT = 120


def _describe(exc: SQLAlchemyError) -> str:
    # DBAPI errors keep the driver message on .orig; str(exc) adds the SQL statement
    source = getattr(exc, "orig", None) or exc
    lines = str(source).splitlines()
    message = lines[0] if lines else type(exc).__name__
    return message[:_MAX_ERROR_TEXT]


class MiscController:
    def __init__(self, *, database_check: Callable[[], bool]) -> None:
        self._database_check = database_check

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/health", view_func=self.health, methods=["GET"])
        return bp

    def health(self):
        status: dict[str, object] = {"ok": True}
        try:
            self._database_check()
            status["database"] = "ok"
        except SQLAlchemyError as exc:
            logger.warning(f"health: database check failed ({type(exc).__name__})")
            status["ok"] = False
            status["database"] = f"error: {_describe(exc)}"
        return jsonify(status)
