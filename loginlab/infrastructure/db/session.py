# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, scoped_session, sessionmaker

from loginlab.shared.config import DatabaseConfig, load_config
from loginlab.shared.logging import logger


class Base(DeclarativeBase):
    pass


def build_engine(database: DatabaseConfig) -> Engine:
    options: dict[str, object] = {"echo": False, "pool_pre_ping": True}
    if database.url.startswith("sqlite"):
        # One sqlite file is shared by the request threads of the dev server
        options["connect_args"] = {
            "check_same_thread": False,
            "timeout": int(database.pool_timeout),
        }
    if database.url not in ("sqlite://", "sqlite:///:memory:"):
        options.update(
            pool_size=database.pool_size,
            max_overflow=database.max_overflow,
            pool_timeout=database.pool_timeout,
        )
    return create_engine(database.url, **options)


ENGINE: Engine = build_engine(load_config().database)

SessionLocal = scoped_session(
    sessionmaker(bind=ENGINE, autoflush=False, expire_on_commit=False)
)


@contextmanager
def session_scope() -> Iterator[Session]:
    """Unit of work: commit on success, roll back and re-raise on failure."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        logger.exception("db.session: rolled back")
        raise
    finally:
        session.close()
        SessionLocal.remove()


def init_db() -> None:
    from loginlab.infrastructure.db import models  # noqa: F401

    Base.metadata.create_all(bind=ENGINE)
    logger.info(f"db: schema ready tables={sorted(Base.metadata.tables)}")


def drop_db() -> None:
    Base.metadata.drop_all(bind=ENGINE)
    logger.info("db: schema dropped")
