"""Message repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.message import Message


class IMessageRepository(Protocol):
    """Read-side repository interface for Message entities."""

    async def list_for_match(self, match_id: UUID) -> list[Message]:
        """List a match's messages, oldest first."""
        ...

    async def count_for_matches(self, match_ids: list[UUID]) -> dict[UUID, int]:
        """Count messages per match in a single query."""
        ...

    async def count_active_chats(self) -> int:
        """Count matched pairs that have at least one message."""
        ...
