"""Prepare the configured database: create it on Postgres, then create tables."""
from __future__ import annotations

import argparse
import logging
import sys
from urllib.parse import urlsplit, urlunsplit

import psycopg
from psycopg import sql

from cupid_stage.core.logging import configure_logging
from cupid_stage.core.settings import settings
from cupid_stage.db.session import create_tables, drop_tables

logger = logging.getLogger(__name__)


def to_libpq_url(uri: str) -> str:
    """Return a Postgres URI psycopg can connect to.

    Strips surrounding quotes and the SQLAlchemy driver suffix
    (``postgresql+psycopg://`` becomes ``postgresql://``).

    Raises:
        ValueError: If the URI is empty or not a Postgres URI.
    """
    uri = (uri or "").strip().strip("'\"")
    if not uri:
        raise ValueError("DATABASE_URL is empty")
    parts = urlsplit(uri)
    scheme = parts.scheme.split("+", 1)[0]
    if scheme not in {"postgresql", "postgres"}:
        raise ValueError(f"Not a Postgres URL: {uri!r}")
    return urlunsplit(("postgresql", parts.netloc, parts.path, parts.query, parts.fragment))


def maintenance_url(db_url: str) -> tuple[str, str]:
    """Return ``(admin_url, target_db)`` pointing the admin URL at ``postgres``."""
    parts = urlsplit(to_libpq_url(db_url))
    target_db = parts.path.lstrip("/") or "postgres"
    admin_url = urlunsplit(("postgresql", parts.netloc, "/postgres", parts.query, ""))
    return admin_url, target_db


def ensure_database_exists(db_url: str) -> bool:
    """Create the Postgres database named in ``db_url`` if missing.

    Returns:
        True if the database was created.
    """
    admin_url, target_db = maintenance_url(db_url)
    with psycopg.connect(admin_url, autocommit=True) as conn, conn.cursor() as cur:
        cur.execute("SELECT 1 FROM pg_database WHERE datname = %s", (target_db,))
        if cur.fetchone() is not None:
            logger.info("Database %s already exists", target_db)
            return False
        cur.execute(sql.SQL("CREATE DATABASE {}").format(sql.Identifier(target_db)))
    logger.info("Created database %s", target_db)
    return True


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Ensure the configured database and tables exist")
    parser.add_argument(
        "--drop-tables",
        action="store_true",
        help="Drop all application tables before creating them again.",
    )
    args = parser.parse_args(argv)
    configure_logging(settings.log_level)

    url = settings.effective_database_url
    try:
        if not url.startswith("sqlite"):
            ensure_database_exists(url)
        if args.drop_tables:
            drop_tables()
        create_tables()
    except (ValueError, psycopg.Error) as exc:
        logger.error("Database preparation failed: %s", exc)
        return 1
    logger.info("Tables ready")
    return 0


if __name__ == "__main__":
    sys.exit(main())
