"""Message domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Message:
    """A chat message within a match. Read-only in this service."""

    match_id: UUID
    sender_id: UUID
    content: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True, slots=True)
class MessageWithSender:
    """Message bundled with the sender's display data."""

    message: Message
    sender_name: str
    sender_avatar_url: str | None = None
