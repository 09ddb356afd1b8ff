"""Engine/session helpers for the SQLite backend."""
from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator, Optional

from sqlalchemy import Table, create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from registry.core.config import get_settings
from registry.core.errors import StorageError

Base = declarative_base()


def database_url(db_path: Optional[str], default_path: str) -> str:
    """Resolve the SQLite URL: explicit path, then SQLITE_DB_PATH, then the default."""
    path = (db_path or "").strip() or get_settings().sqlite_db_path or default_path
    return f"sqlite:///{path}"


def _casefold(value):
    return value.casefold() if isinstance(value, str) else value


@lru_cache
def get_engine(url: str):
    engine = create_engine(url, future=True, echo=get_settings().sql_echo)

    @event.listens_for(engine, "connect")
    def _register_functions(dbapi_connection, _record):
        # SQLite lower() only folds ASCII; names may carry accents.
        dbapi_connection.create_function("lower", 1, _casefold, deterministic=True)

    return engine


@lru_cache
def _get_sessionmaker(url: str):
    return sessionmaker(bind=get_engine(url), autoflush=False, autocommit=False, future=True)


@contextmanager
def get_session(url: str) -> Iterator[Session]:
    session: Session = _get_sessionmaker(url)()
    try:
        yield session
    finally:
        session.close()


def init_schema(url: str, *tables: Table) -> None:
    """Create the given tables if they are absent."""
    try:
        Base.metadata.create_all(bind=get_engine(url), tables=list(tables))
    except SQLAlchemyError as exc:
        raise StorageError(f"Failed to initialise database at {url}: {exc}") from exc
