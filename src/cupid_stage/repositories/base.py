"""Shared helpers for repository implementations."""
from __future__ import annotations

from typing import Any

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

__all__ = ["dialect_insert"]


def dialect_insert(session: Session, model: type[Any]) -> Any:
    """Return an ``INSERT`` construct supporting ``ON CONFLICT`` for the bound dialect.

    Upserts and insert-or-ignore writes must be a single atomic statement, so
    repositories build them with the dialect-specific constructs rather than a
    read-then-write sequence.
    """
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert(model)
    if dialect == "sqlite":
        return sqlite.insert(model)
    raise NotImplementedError(f"Unsupported database dialect for upserts: {dialect}")
