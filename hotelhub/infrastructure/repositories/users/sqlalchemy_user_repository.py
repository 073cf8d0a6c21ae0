# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from hotelhub.domain.users.entities import User as DomainUser
from hotelhub.domain.users.exceptions import UserAlreadyExistsError, UserStorageError
from hotelhub.domain.users.repositories import UserRepository
from hotelhub.infrastructure.db.models import User
from hotelhub.infrastructure.unit_of_work import unit_of_work_scope


def _as_utc(value: datetime) -> datetime:
    # SQLite drops the offset on read; stored values are always UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        email=row.email,
        username=row.username,
        password_hash=row.password_hash,
        created_at=_as_utc(row.created_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_by_email(self, email: str) -> DomainUser | None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = session.scalars(select(User).where(User.email == email)).one_or_none()
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            raise UserStorageError(context={"operation": "find_by_email"}) from exc

    def find_by_id(self, user_id: str) -> DomainUser | None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = session.get(User, user_id)
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            raise UserStorageError(context={"operation": "find_by_id"}) from exc

    def add(self, *, email: str, username: str, password_hash: str) -> DomainUser:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = User(email=email, username=username, password_hash=password_hash)
                session.add(row)
                session.flush()
                return _to_domain(row)
        except IntegrityError as exc:
            # email is the only unique column
            raise UserAlreadyExistsError() from exc
        except SQLAlchemyError as exc:
            raise UserStorageError(context={"operation": "add"}) from exc
