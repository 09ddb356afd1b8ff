"""Database helpers (engine/session export)."""

from .session import Base, database_url, get_engine, get_session, init_schema

__all__ = ["Base", "database_url", "get_engine", "get_session", "init_schema"]
