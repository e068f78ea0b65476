# src/cupid_stage/main.py
"""Main entry point for the Cupid application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from cupid_stage import __version__
from cupid_stage.api.v1 import (
    conversations_router,
    discovery_router,
    matches_router,
    messages_router,
    moderation_router,
    realtime_router,
    swipes_router,
    system_router,
)
from cupid_stage.core.logging import configure_logging
from cupid_stage.core.settings import settings
from cupid_stage.errors import (
    CupidError,
    InternalError,
    InvalidInputError,
    NotFoundError,
    NotMatchedError,
    UnauthenticatedError,
    UnauthorizedError,
)
from cupid_stage.realtime import RealtimeNotifier, build_session_registry

logger = logging.getLogger(__name__)

ERROR_STATUS: dict[type[CupidError], int] = {
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    UnauthenticatedError: status.HTTP_401_UNAUTHORIZED,
    UnauthorizedError: status.HTTP_403_FORBIDDEN,
    NotMatchedError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InternalError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(error: CupidError) -> int:
    """Return the HTTP status for a domain error, walking its class hierarchy."""
    for cls in type(error).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_logging(settings.log_level)
    app.state.notifier = RealtimeNotifier(build_session_registry(settings))
    logger.info("%s %s started", settings.app_name, __version__)
    try:
        yield
    finally:
        await app.state.notifier.close()
        logger.info("%s stopped", settings.app_name)


# Initialize FastAPI app
app = FastAPI(
    title="Cupid API",
    description="Swipe, match and chat service",
    version=__version__,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)


def _describe(request: Request) -> str:
    # WebSocket scopes carry no HTTP method.
    return f"{request.scope.get('method', 'WEBSOCKET')} {request.url.path}"


@app.exception_handler(CupidError)
async def handle_cupid_error(request: Request, exc: CupidError) -> JSONResponse:
    code = status_for(exc)
    if code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s failed: %s", _describe(request), exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthenticatedError) else None
    return JSONResponse(
        status_code=code,
        content={"detail": exc.message, "code": exc.code},
        headers=headers,
    )


@app.exception_handler(SQLAlchemyError)
async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s", _describe(request), exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "code": InternalError.code},
    )


# Include API routers
app.include_router(swipes_router, prefix="/api/v1")
app.include_router(matches_router, prefix="/api/v1")
app.include_router(conversations_router, prefix="/api/v1")
app.include_router(messages_router, prefix="/api/v1")
app.include_router(discovery_router, prefix="/api/v1")
app.include_router(moderation_router, prefix="/api/v1")
app.include_router(system_router, prefix="/api/v1")
app.include_router(realtime_router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": __version__,
        "description": "Swipe, match and chat service",
        "docs": "/docs",
        "websocket": "/ws",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("cupid_stage.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
