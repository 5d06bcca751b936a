"""Pydantic schemas for reported content."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.report import ReportContentType, ReportStatus


class ReportCreate(BaseModel):
    """Schema for filing a report against another user."""

    reported_user_id: UUID
    reason: str = Field(..., min_length=1, max_length=500)
    content_type: ReportContentType = ReportContentType.PROFILE
    content: str = Field("", max_length=5000)


class ReportResponse(BaseModel):
    """Schema for a report, with display names for the moderation queue."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    reporter_id: UUID
    reported_user_id: UUID
    reason: str
    content_type: ReportContentType
    content: str
    status: ReportStatus
    created_at: datetime
    reported_user_name: str | None = None
    reported_user_avatar_url: str | None = None
    reporter_name: str | None = None


class ReportDetailResponse(BaseModel):
    data: ReportResponse


class ReportListResponse(BaseModel):
    data: list[ReportResponse]


class ReportResolve(BaseModel):
    """Moderator decision on a report."""

    decision: ReportStatus = Field(..., description="approved or rejected")
