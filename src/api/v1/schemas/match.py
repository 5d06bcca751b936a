"""Pydantic schemas for Match and Message API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from api.v1.schemas.common import ProfileSummaryResponse
from domain.entities.match import MatchStatus


class MatchResponse(BaseModel):
    """A match from the requesting user's point of view."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "789e4567-e89b-12d3-a456-426614174000",
                "status": "matched",
                "created_at": "2026-01-28T10:00:00",
                "profile": {
                    "id": "123e4567-e89b-12d3-a456-426614174000",
                    "full_name": "Jane Doe",
                    "avatar_url": None,
                    "bio": "Coffee first.",
                },
            }
        },
    )

    id: UUID
    status: MatchStatus
    created_at: datetime
    profile: ProfileSummaryResponse


class MatchListResponse(BaseModel):
    """Schema for list of Matches."""

    data: list[MatchResponse]


class MessageResponse(BaseModel):
    """Schema for a chat message."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    match_id: UUID
    sender_id: UUID
    content: str
    created_at: datetime


class MessageListResponse(BaseModel):
    """Schema for a match's message history, oldest first."""

    data: list[MessageResponse]
