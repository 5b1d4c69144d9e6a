"""PostgreSQL database module."""

from .client import init_db, close_db, get_db_session, get_async_engine, session_scope

__all__ = [
    "init_db",
    "close_db",
    "get_db_session",
    "get_async_engine",
    "session_scope",
]
