# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta


@dataclass(slots=True, frozen=True)
class User:

    id: str
    email: str
    username: str
    password_hash: str = field(repr=False)
    created_at: datetime


@dataclass(slots=True, frozen=True)
class Credentials:
    """Credentials as decoded from a request body; never persisted."""

    email: str
    password: str = field(repr=False)
    username: str | None = None


@dataclass(slots=True, frozen=True)
class SessionClaim:

    user_id: str
    issued_at: datetime
    expires_at: datetime

    @classmethod
    def issue(cls, user_id: str, ttl: timedelta, *, now: datetime | None = None) -> SessionClaim:
        # JWT timestamps are whole seconds
        issued_at = (now or datetime.now(UTC)).replace(microsecond=0)
        return cls(user_id=user_id, issued_at=issued_at, expires_at=issued_at + ttl)

    def is_expired(self, *, now: datetime | None = None) -> bool:
        return (now or datetime.now(UTC)) >= self.expires_at


@dataclass(slots=True, frozen=True)
class SessionToken:

    token: str = field(repr=False)
    claim: SessionClaim

    @property
    def user_id(self) -> str:
        return self.claim.user_id

    @property
    def expires_at(self) -> datetime:
        return self.claim.expires_at
