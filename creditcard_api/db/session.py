"""Engine/session helpers for the SQL backend."""
from __future__ import annotations

import threading
from contextlib import contextmanager, nullcontext
from functools import lru_cache
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

from creditcard_api.core.config import get_settings

Base = declarative_base()

_MEMORY_URLS = {"sqlite://", "sqlite:///:memory:"}

# The in-memory database lives on a single sqlite3 connection; sessions take
# turns on it.
_memory_lock = threading.RLock()


def _enable_sqlite_foreign_keys(dbapi_conn, connection_record) -> None:  # type: ignore[no-untyped-def]
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, *, echo: bool = False) -> Engine:
    """Create an engine for ``url``; SQLite gets thread-shareable connections."""
    url = (url or "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL must be configured to use the SQL backend.")
    if not url.startswith("sqlite"):
        return create_engine(url, future=True, pool_pre_ping=True, echo=echo)

    connect_args = {"check_same_thread": False}
    if url in _MEMORY_URLS:
        # a single shared connection, otherwise every checkout sees an empty db
        engine = create_engine(url, future=True, echo=echo, connect_args=connect_args, poolclass=StaticPool)
    else:
        engine = create_engine(url, future=True, echo=echo, connect_args=connect_args)
    event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def connection_guard(engine: Engine):
    """Lock held while using a single-connection engine; a no-op otherwise."""
    if isinstance(engine.pool, StaticPool):
        return _memory_lock
    return nullcontext()


@lru_cache
def get_engine() -> Engine:
    settings = get_settings()
    return build_engine(settings.database_url, echo=settings.sql_echo)


@lru_cache
def _get_sessionmaker():
    return sessionmaker(bind=get_engine(), autoflush=False, autocommit=False, expire_on_commit=False, future=True)


@contextmanager
def get_session() -> Iterator[Session]:
    with connection_guard(get_engine()):
        session: Session = _get_sessionmaker()()
        try:
            yield session
        finally:
            session.close()
