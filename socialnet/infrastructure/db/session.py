# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from socialnet.shared.config import DatabaseConfig
from socialnet.shared.logging import logger

from .models import Base


class Database:
    """Store handle with an explicit lifecycle.

    Created once by the application factory and handed to every repository;
    ``init()`` opens the engine and ensures the schema, ``dispose()`` closes
    pooled connections.
    """

    def __init__(self, config: DatabaseConfig) -> None:
        self._config = config
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    def init(self) -> Database:
        if self._engine is not None:
            return self

        kwargs: dict[str, object] = {"echo": False, "pool_pre_ping": True}
        if self._config.is_sqlite():
            kwargs["connect_args"] = {
                "check_same_thread": False,
                "timeout": int(self._config.pool_timeout),
            }
            if self._config.url in ("sqlite://", "sqlite:///:memory:"):
                kwargs["poolclass"] = StaticPool
        else:
            kwargs.update(
                pool_size=self._config.pool_size,
                max_overflow=self._config.max_overflow,
                pool_timeout=self._config.pool_timeout,
            )

        self._engine = create_engine(self._config.url, **kwargs)
        self._session_factory = sessionmaker(
            bind=self._engine, autoflush=False, autocommit=False, expire_on_commit=False
        )
        Base.metadata.create_all(bind=self._engine)
        logger.info("db: engine ready, schema ensured")
        return self

    def dispose(self) -> None:
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("db: engine disposed")

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database accessed before init()")
        return self._engine

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        if self._session_factory is None:
            raise RuntimeError("Database accessed before init()")
        session = self._session_factory()
        logger.debug("db.session: opened")
        try:
            yield session
            session.commit()
            logger.debug("db.session: committed")
        except Exception:
            logger.debug("db.session: error, rolling back")
            session.rollback()
            raise
        finally:
            session.close()

    def ping(self) -> bool:
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
