"""Error taxonomy shared by the swipe, match and messaging services.

Services raise these; the HTTP layer maps them to status codes in
``cupid_stage.main`` and the websocket layer turns them into ``error``
events on the originating session.
"""

from __future__ import annotations


class CupidError(RuntimeError):
    """Base exception for all domain failures."""

    code = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(CupidError):
    """Raised for malformed parameters or self-referential actions."""

    code = "invalid_input"


class UnauthorizedError(CupidError):
    """Raised when the actor is not a participant of the resource."""

    code = "unauthorized"


class NotMatchedError(CupidError):
    """Raised when a conversation action targets a pair without a match."""

    code = "not_matched"


class NotFoundError(CupidError):
    """Raised when a referenced conversation or user does not exist."""

    code = "not_found"


class UnauthenticatedError(CupidError):
    """Raised when a credential is missing or invalid."""

    code = "unauthenticated"


class InternalError(CupidError):
    """Raised when the persistence layer fails."""

    code = "internal"


__all__ = [
    "CupidError",
    "InvalidInputError",
    "UnauthorizedError",
    "NotMatchedError",
    "NotFoundError",
    "UnauthenticatedError",
    "InternalError",
]
