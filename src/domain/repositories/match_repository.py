"""Match repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.match import Match, MatchStatus


class IMatchRepository(Protocol):
    """Repository interface for Match entities."""

    async def get(self, id: UUID) -> Match | None:
        """Get a match by ID."""
        ...

    async def get_between(self, user_a: UUID, user_b: UUID) -> Match | None:
        """Get the match row for a pair regardless of direction."""
        ...

    async def list_for_user(self, user_id: UUID, status: MatchStatus | None = None) -> list[Match]:
        """List matches where user_id is either side, newest first."""
        ...

    async def list_all(self) -> list[Match]:
        """List every match, newest first."""
        ...

    async def count_by_status(self, status: MatchStatus) -> int:
        """Count matches in a status."""
        ...

    async def create(self, match: Match) -> Match:
        """Create a new match."""
        ...

    async def update(self, match: Match) -> Match:
        """Persist status changes of an existing match."""
        ...
