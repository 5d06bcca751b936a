"""Pydantic schemas for discovery (candidate feed and swipes)."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from api.v1.schemas.profile import ProfileResponse
from domain.entities.match import MatchStatus
from domain.entities.swipe import SwipeAction


class CandidateResponse(BaseModel):
    """A ranked profile offered for swiping."""

    profile: ProfileResponse
    match_score: int


class CandidateListResponse(BaseModel):
    """Schema for the ranked candidate feed."""

    data: list[CandidateResponse]
    total: int


class SwipeCreate(BaseModel):
    """Schema for recording a swipe."""

    swiped_id: UUID
    action: SwipeAction


class SwipeResponse(BaseModel):
    id: UUID
    swiper_id: UUID
    swiped_id: UUID
    action: SwipeAction
    created_at: datetime


class SwipeResultResponse(BaseModel):
    """The stored swipe and whether it completed a mutual match."""

    swipe: SwipeResponse
    is_match: bool
    match_id: UUID | None = None
    match_status: MatchStatus | None = None
    message: str | None = None


class SwipeResultDetailResponse(BaseModel):
    data: SwipeResultResponse
