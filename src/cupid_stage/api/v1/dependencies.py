"""Shared API dependencies for authentication and common functionality."""

from collections.abc import Callable
from contextlib import AbstractContextManager
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from cupid_stage.core.security import decode_access_token
from cupid_stage.db.session import get_db, session_scope
from cupid_stage.errors import UnauthenticatedError
from cupid_stage.models import User
from cupid_stage.realtime import RealtimeNotifier

# Missing credentials are reported through UnauthenticatedError rather than FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]

SessionFactory = Callable[[], AbstractContextManager[Session]]


def get_session_factory() -> SessionFactory:
    """Return the factory long-lived connections use to open one session per unit of work."""
    return session_scope


SessionFactoryDep = Annotated[SessionFactory, Depends(get_session_factory)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from the bearer token.

    Args:
        credentials: HTTP Bearer token credentials, if any
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        UnauthenticatedError: If the token is missing or invalid, or the user no longer exists
    """
    token = credentials.credentials if credentials is not None else None
    user_id = decode_access_token(token)
    user = db.get(User, user_id)
    if user is None:
        raise UnauthenticatedError("User not found")
    return user


def get_notifier(request: Request) -> RealtimeNotifier:
    """Return the realtime notifier owned by the running application."""
    notifier: RealtimeNotifier = request.app.state.notifier
    return notifier


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
NotifierDep = Annotated[RealtimeNotifier, Depends(get_notifier)]
