"""Database engine, session factory and declarative base."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or url.endswith(":memory:")


def _ensure_sqlite_parent_dir(url: str) -> None:
    # sqlite:///relative/path.db or sqlite:////abs/path.db
    if not url.startswith("sqlite:///") or _is_memory_sqlite(url):
        return
    path = url.replace("sqlite:///", "", 1)
    if path:
        Path(path).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)


def create_db_engine(url: str) -> Engine:
    """Create an engine for ``url`` with SQLite-friendly connection options."""
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)

    _ensure_sqlite_parent_dir(url)
    # Sessions are used from worker threads
    connect_args = {"check_same_thread": False}
    if _is_memory_sqlite(url):
        # One shared connection, otherwise every thread sees an empty database
        return create_engine(url, connect_args=connect_args, poolclass=StaticPool)
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True)


class Database:
    """Explicit handle around an engine and its session factory.

    One instance is built per application and passed to whatever needs
    persistence, instead of a module-level global connection.
    """

    def __init__(self, url: str) -> None:
        self.url = url
        self.engine = create_db_engine(url)
        self._factory = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Yield a session that is always closed afterwards."""
        session = self._factory()
        try:
            yield session
        finally:
            session.close()

    def init_db(self) -> None:
        """Create all tables that do not exist yet."""
        # Register models on Base.metadata
        from jersey_store import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def ping(self) -> bool:
        """Return True when a trivial query succeeds."""
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            logger.exception("Database ping failed")
            return False

    def dispose(self) -> None:
        self.engine.dispose()
