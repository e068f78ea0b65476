# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from contextlib import contextmanager

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-cupid-stage")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SESSION_REGISTRY_BACKEND", "memory")

from cupid_stage.api.v1.dependencies import get_session_factory  # noqa: E402
from cupid_stage.core.security import create_access_token  # noqa: E402
from cupid_stage.db.session import Base, build_engine  # noqa: E402
from cupid_stage.db.session import get_db as app_get_session  # noqa: E402
from cupid_stage.main import app as fastapi_app  # noqa: E402
from cupid_stage.models import User  # noqa: E402
from cupid_stage.services import MatchRegistry  # noqa: E402

TEST_DB_URL = "sqlite://"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = build_engine(TEST_DB_URL)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autoflush=False,
        join_transaction_mode="create_savepoint",
    )
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # pysqlite releases the outermost savepoint as a commit; wipe rows explicitly.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    @contextmanager
    def _scoped_session_override() -> Iterator[Session]:
        try:
            yield db_session
        except Exception:
            db_session.rollback()
            raise

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_session_factory] = lambda: _scoped_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(get_session_factory, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory persisting users with optional profile fields."""

    def _make_user(
        name: str,
        user_id: int | None = None,
        photo_url: str | None = None,
        latitude: float | None = None,
        longitude: float | None = None,
        is_paused: bool = False,
    ) -> User:
        user = User(
            id=user_id,
            name=name,
            photo_url=photo_url,
            latitude=latitude,
            longitude=longitude,
            is_paused=is_paused,
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture()
def alice(make_user: Callable[..., User]) -> User:
    return make_user("Alice", photo_url="https://img.example/alice.png")


@pytest.fixture()
def bob(make_user: Callable[..., User]) -> User:
    return make_user("Bob")


@pytest.fixture()
def carol(make_user: Callable[..., User]) -> User:
    return make_user("Carol")


def bearer(user_id: int) -> dict[str, str]:
    """Return authorization headers for ``user_id``."""
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture()
def alice_headers(alice: User) -> dict[str, str]:
    return bearer(alice.id)


@pytest.fixture()
def bob_headers(bob: User) -> dict[str, str]:
    return bearer(bob.id)


@pytest.fixture()
def carol_headers(carol: User) -> dict[str, str]:
    return bearer(carol.id)


@pytest.fixture()
def matched(db_session: Session, alice: User, bob: User) -> tuple[User, User]:
    """Alice and Bob with a recorded match."""
    MatchRegistry(db_session).create_match_if_absent(alice.id, bob.id)
    return alice, bob


@pytest.fixture()
def auth_headers() -> Callable[[int], dict[str, str]]:
    """Return the header factory for ad-hoc users."""
    return bearer
