"""Swipe domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4


class SwipeAction(StrEnum):
    """A swipe decision."""

    LIKE = "like"
    DISLIKE = "dislike"


@dataclass(frozen=True)
class Swipe:
    """Immutable record of one user's decision on another."""

    swiper_id: UUID
    swiped_id: UUID
    action: SwipeAction
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
