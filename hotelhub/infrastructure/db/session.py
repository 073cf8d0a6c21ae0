# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from hotelhub.shared.config.settings import DatabaseConfig
from hotelhub.shared.logging import logger

_IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


class Base(DeclarativeBase):
    pass


def build_engine(database: DatabaseConfig) -> Engine:
    if database.url in _IN_MEMORY_URLS:
        return create_engine(
            database.url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    connect_args: dict[str, object] = {}
    if database.url.startswith("sqlite"):
        connect_args = {
            "check_same_thread": False,
            "timeout": int(database.pool_timeout),
        }

    return create_engine(
        database.url,
        echo=False,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
        pool_timeout=database.pool_timeout,
        connect_args=connect_args,
    )


def build_session_factory(engine: Engine) -> scoped_session:
    return scoped_session(
        sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
    )


def init_db(engine: Engine) -> None:
    # registers the mapped tables on Base.metadata
    from hotelhub.infrastructure.db import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ensured")
