"""Database package: engine, session, base."""

from fittrack.db.session import async_session_maker, engine, get_db

__all__ = ["async_session_maker", "engine", "get_db"]
