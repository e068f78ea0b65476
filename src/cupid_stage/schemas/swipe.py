# src/cupid_stage/schemas/swipe.py
"""Swipe-related Pydantic schemas."""

from datetime import datetime

from pydantic import Field

from .common import CamelModel


class SwipeCreate(CamelModel):
    """Schema for recording a swipe."""

    swipee_id: int = Field(..., gt=0, description="User being swiped on")
    direction: str = Field(..., description="'left' to pass, 'right' to like")


class SwipeResponse(CamelModel):
    """Outcome of a swipe."""

    matched: bool


class SwipeHistoryItem(CamelModel):
    """A swipe previously made by the current user."""

    swipee_id: int
    direction: str
    swiped_at: datetime
