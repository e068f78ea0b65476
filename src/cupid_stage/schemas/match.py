# src/cupid_stage/schemas/match.py
"""Match-related Pydantic schemas."""

from datetime import datetime

from cupid_stage.repositories.records import MatchSummary

from .common import CamelModel, UserSummaryResponse


class MatchResponse(CamelModel):
    """A match seen from the current user's side."""

    match_id: int
    other_user: UserSummaryResponse
    matched_at: datetime

    @classmethod
    def from_record(cls, match: MatchSummary) -> "MatchResponse":
        return cls(
            match_id=match.match_id,
            other_user=UserSummaryResponse.from_record(match.other_user),
            matched_at=match.matched_at,
        )
