"""Identity-service (Supabase Auth) entities used by the back office."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class AuthUser:
    """An account as reported by the identity service admin API."""

    id: UUID
    email: str | None = None
    last_sign_in_at: datetime | None = None
    banned: bool = False


@dataclass(frozen=True, slots=True)
class AuthSession:
    """Session returned by an OAuth code exchange."""

    access_token: str
    refresh_token: str | None
    user_id: UUID
    email: str | None = None


@dataclass(frozen=True, slots=True)
class ManagedUser:
    """Profile joined with its auth account for the user management view."""

    id: UUID
    full_name: str
    email: str | None
    created_at: datetime
    last_sign_in_at: datetime | None
    banned: bool
    verified: bool


@dataclass(frozen=True, slots=True)
class AdminStats:
    """Dashboard counters for the back office."""

    total_users: int
    total_matches: int
    active_chats: int
    reported_content: int
