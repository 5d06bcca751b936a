"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import LikedProfile, Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by identity. Returns None when no row exists."""
        ...

    async def get_many(self, ids: list[UUID]) -> dict[UUID, Profile]:
        """Get several profiles keyed by identity."""
        ...

    async def list_all(self) -> list[Profile]:
        """List every profile, newest first."""
        ...

    async def list_unswiped(self, user_id: UUID) -> list[Profile]:
        """List profiles other than user_id that user_id has not swiped on."""
        ...

    async def list_liked_by(self, user_id: UUID) -> list[LikedProfile]:
        """List profiles user_id liked, newest like first."""
        ...

    async def count(self) -> int:
        """Count all profiles."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Update an existing profile."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a profile and return success status."""
        ...
