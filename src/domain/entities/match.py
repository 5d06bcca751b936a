"""Match domain entity and its status machine."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4

from core.exceptions import InvalidMatchTransitionError


class MatchStatus(StrEnum):
    """Canonical match lifecycle: pending -> matched -> unmatched (terminal)."""

    PENDING = "pending"
    MATCHED = "matched"
    UNMATCHED = "unmatched"


_ALLOWED_TRANSITIONS: dict[MatchStatus, frozenset[MatchStatus]] = {
    MatchStatus.PENDING: frozenset({MatchStatus.MATCHED, MatchStatus.UNMATCHED}),
    MatchStatus.MATCHED: frozenset({MatchStatus.UNMATCHED}),
    MatchStatus.UNMATCHED: frozenset(),
}


def can_transition(current: MatchStatus, target: MatchStatus) -> bool:
    """Check whether a match may move from current to target status."""
    return target in _ALLOWED_TRANSITIONS[current]


@dataclass
class Match:
    """Domain entity for a (directionally stored) match between two users."""

    user_id: UUID
    matched_user_id: UUID
    status: MatchStatus = MatchStatus.PENDING
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_chat_enabled(self) -> bool:
        return self.status == MatchStatus.MATCHED

    def involves(self, user_id: UUID) -> bool:
        return user_id in (self.user_id, self.matched_user_id)

    def counterpart(self, user_id: UUID) -> UUID:
        """Return the other side of the match for the given participant."""
        return self.matched_user_id if user_id == self.user_id else self.user_id

    def transition_to(self, target: MatchStatus) -> None:
        """Move to target status, stamping updated_at.

        Raises:
            InvalidMatchTransitionError: If the status machine forbids it.
        """
        if not can_transition(self.status, target):
            raise InvalidMatchTransitionError(self.status.value, target.value)
        self.status = target
        self.updated_at = datetime.utcnow()


@dataclass(frozen=True, slots=True)
class ProfileSummary:
    """Minimal profile data shown next to a match."""

    id: UUID
    full_name: str
    avatar_url: str | None = None
    bio: str | None = None


@dataclass(frozen=True, slots=True)
class MatchWithProfile:
    """Read-only value object: a match from one user's point of view."""

    match: Match
    profile: ProfileSummary


@dataclass(frozen=True, slots=True)
class MatchOverview:
    """Read-only value object for the admin matches monitor."""

    match: Match
    user: ProfileSummary
    matched_user: ProfileSummary
    messages_count: int
