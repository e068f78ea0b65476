"""Engine, session factory and schema helpers."""

from __future__ import annotations

from collections.abc import Generator, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from cupid_stage.core.settings import settings

_IN_MEMORY_URLS = {"sqlite://", "sqlite:///:memory:"}


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Model modules register their tables on Base.metadata at import time.
import cupid_stage.models  # noqa: E402,F401


def build_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine for ``url``.

    SQLite connections are shared with FastAPI's threadpool; an in-memory
    database is pinned to a single connection so every session sees it.
    """
    if not url.startswith("sqlite"):
        return create_engine(url, echo=echo, pool_pre_ping=True)
    kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    if url in _IN_MEMORY_URLS:
        kwargs["poolclass"] = StaticPool
    return create_engine(url, echo=echo, **kwargs)


engine = build_engine(settings.effective_database_url, echo=settings.sql_debug)

SessionLocal = sessionmaker(autoflush=False, bind=engine)


@contextmanager
def session_scope() -> Iterator[Session]:
    """Yield a session that is rolled back on error and always closed."""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    with session_scope() as db:
        yield db


def create_tables(bind: Engine | None = None) -> None:
    """Create every table that does not exist yet."""
    Base.metadata.create_all(bind=bind or engine)


def drop_tables(bind: Engine | None = None) -> None:
    """Drop every application table."""
    Base.metadata.drop_all(bind=bind or engine)
