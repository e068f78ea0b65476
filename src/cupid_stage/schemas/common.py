# src/cupid_stage/schemas/common.py
"""Shared Pydantic building blocks."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from cupid_stage.repositories.records import UserSummary


class CamelModel(BaseModel):
    """Base schema serialised with camelCase keys, accepting either case on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserSummaryResponse(CamelModel):
    """Public profile fragment for another user."""

    id: int
    name: str
    photo_url: str | None = None

    @classmethod
    def from_record(cls, user: UserSummary) -> "UserSummaryResponse":
        return cls(id=user.id, name=user.name, photo_url=user.photo_url)


class ErrorResponse(BaseModel):
    """Body returned for every domain error."""

    detail: str
    code: str
