"""Database engine, sessions and column helpers."""

from .session import (
    Base,
    SessionLocal,
    build_engine,
    create_tables,
    drop_tables,
    get_db,
    session_scope,
)
from .time import UTCDateTime, as_utc, utcnow

__all__ = [
    "Base",
    "SessionLocal",
    "UTCDateTime",
    "as_utc",
    "build_engine",
    "create_tables",
    "drop_tables",
    "get_db",
    "session_scope",
    "utcnow",
]
