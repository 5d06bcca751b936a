"""Pydantic schemas for the back-office API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from api.v1.schemas.common import ProfileSummaryResponse
from domain.entities.match import MatchStatus


class StatsResponse(BaseModel):
    """Dashboard counters."""

    total_users: int
    total_matches: int
    active_chats: int
    reported_content: int


class StatsDetailResponse(BaseModel):
    data: StatsResponse


class MatchOverviewResponse(BaseModel):
    """A match with both participants and its message count."""

    id: UUID
    status: MatchStatus
    created_at: datetime
    user: ProfileSummaryResponse
    matched_user: ProfileSummaryResponse
    messages_count: int


class MatchOverviewListResponse(BaseModel):
    data: list[MatchOverviewResponse]


class AdminMatchResponse(BaseModel):
    id: UUID
    user_id: UUID
    matched_user_id: UUID
    status: MatchStatus
    updated_at: datetime


class AdminMatchDetailResponse(BaseModel):
    data: AdminMatchResponse


class AdminMessageResponse(BaseModel):
    """A message with its sender's display data."""

    id: UUID
    sender_id: UUID
    sender_name: str
    sender_avatar_url: str | None = None
    content: str
    created_at: datetime


class AdminMessageListResponse(BaseModel):
    data: list[AdminMessageResponse]


class ManagedUserResponse(BaseModel):
    """A profile joined with its auth account."""

    id: UUID
    full_name: str
    email: str | None = None
    created_at: datetime
    last_sign_in_at: datetime | None = None
    banned: bool
    verified: bool


class ManagedUserListResponse(BaseModel):
    data: list[ManagedUserResponse]
