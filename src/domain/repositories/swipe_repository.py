"""Swipe repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.swipe import Swipe, SwipeAction


class ISwipeRepository(Protocol):
    """Repository interface for append-only Swipe records."""

    async def create(self, swipe: Swipe) -> Swipe:
        """Append a swipe record."""
        ...

    async def get_pair(self, swiper_id: UUID, swiped_id: UUID) -> Swipe | None:
        """Get the swipe swiper_id made on swiped_id, if any."""
        ...

    async def exists(self, swiper_id: UUID, swiped_id: UUID, action: SwipeAction) -> bool:
        """Check whether swiper_id swiped swiped_id with the given action."""
        ...
