"""Reported content domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4


class ReportStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ReportFilter(StrEnum):
    """Moderation list filter; ALL disables status filtering."""

    ALL = "all"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ReportContentType(StrEnum):
    PROFILE = "profile"
    MESSAGE = "message"


@dataclass
class ReportedContent:
    """Domain entity for a user report awaiting or past moderation."""

    reporter_id: UUID
    reported_user_id: UUID
    reason: str
    content_type: ReportContentType
    content: str = ""
    status: ReportStatus = ReportStatus.PENDING
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_resolved(self) -> bool:
        return self.status != ReportStatus.PENDING


@dataclass(frozen=True, slots=True)
class ReportView:
    """Report with reporter and reported user names for the moderation queue."""

    report: ReportedContent
    reported_user_name: str | None = None
    reported_user_avatar_url: str | None = None
    reporter_name: str | None = None
