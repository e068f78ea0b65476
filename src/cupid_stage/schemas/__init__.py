"""Pydantic schemas for request and response payloads."""

from .common import CamelModel, ErrorResponse, UserSummaryResponse
from .conversation import (
    ConversationResponse,
    ConversationStart,
    ConversationStartResponse,
    MarkReadResponse,
)
from .discovery import LocationUpdate, NearbyUserResponse
from .match import MatchResponse
from .message import MessageCreate, MessageResponse, SentMessageResponse
from .moderation import (
    BlockCreate,
    BlockCreateResponse,
    BlockResponse,
    BlockStatusResponse,
    ReportCreate,
    ReportCreateResponse,
    ReportResponse,
)
from .swipe import SwipeCreate, SwipeHistoryItem, SwipeResponse

__all__ = [
    "BlockCreate",
    "BlockCreateResponse",
    "BlockResponse",
    "BlockStatusResponse",
    "CamelModel",
    "ConversationResponse",
    "ConversationStart",
    "ConversationStartResponse",
    "ErrorResponse",
    "LocationUpdate",
    "MarkReadResponse",
    "MatchResponse",
    "MessageCreate",
    "MessageResponse",
    "NearbyUserResponse",
    "ReportCreate",
    "ReportCreateResponse",
    "ReportResponse",
    "SentMessageResponse",
    "SwipeCreate",
    "SwipeHistoryItem",
    "SwipeResponse",
    "UserSummaryResponse",
]
