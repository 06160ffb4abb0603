"""Database configuration and session management."""

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager
from typing import Any

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from dealership.exceptions import InfrastructureError

logger = logging.getLogger(__name__)

Base: Any = declarative_base()


class Database:
    """Owns the engine and session factory for one application instance.

    Call ``init()`` before serving requests and ``close()`` on shutdown.
    """

    def __init__(self, url: str, **engine_kwargs: Any):
        self.url = url
        self._engine_kwargs = engine_kwargs
        self._engine: Engine | None = None
        self._session_factory: sessionmaker | None = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database has not been initialized")
        return self._engine

    def init(self) -> None:
        """Create the engine and any missing tables."""
        if self._engine is not None:
            return

        kwargs = dict(self._engine_kwargs)
        if self.url.startswith("sqlite"):
            kwargs.setdefault("connect_args", {"check_same_thread": False})
        else:
            kwargs.setdefault("pool_pre_ping", True)
            kwargs.setdefault("pool_size", 5)
            kwargs.setdefault("max_overflow", 10)

        self._engine = create_engine(self.url, **kwargs)
        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self._engine)

        # Import all models here so they are registered with Base.metadata
        from dealership import models  # noqa: F401

        Base.metadata.create_all(bind=self._engine)
        logger.info(f"Database initialized ({self._engine.url.get_backend_name()})")

    def close(self) -> None:
        """Dispose of the engine and its connection pool."""
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database connections closed")

    def session(self) -> Session:
        if self._session_factory is None:
            raise RuntimeError("Database has not been initialized")
        return self._session_factory()


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = request.app.state.context.database.session()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def store_errors(db: Session, action: str) -> Iterator[None]:
    """Roll back and re-raise store failures as ``InfrastructureError``."""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Store failure while trying to {action}: {e}")
        raise InfrastructureError(f"Failed to {action}") from e
