"""Authentication and identity-service protocols."""

from dataclasses import dataclass
from typing import Optional, Protocol
from uuid import UUID

from domain.entities.identity import AuthSession, AuthUser

ADMIN_ROLE = "admin"


@dataclass
class TokenUser:
    """Represents a user extracted from an auth token."""

    id: UUID
    email: str
    display_name: Optional[str] = None
    role: Optional[str] = None
    app_role: Optional[str] = None
    banned: bool = False

    @property
    def is_admin(self) -> bool:
        """Admin access is granted through the app_metadata role claim."""
        return self.app_role == ADMIN_ROLE


class IAuthProvider(Protocol):
    """Protocol for authentication providers."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate an authentication token.

        Args:
            token: The bearer token to validate

        Returns:
            TokenUser if valid, None if invalid
        """
        ...

    def create_token(self, user: TokenUser) -> str:
        """
        Create an authentication token for a user.

        Args:
            user: The user to create a token for

        Returns:
            The generated token string
        """
        ...


class IIdentityService(Protocol):
    """Protocol for the external identity service (sessions and admin API)."""

    async def exchange_code_for_session(
        self, code: str, code_verifier: str | None = None
    ) -> AuthSession:
        """Complete an OAuth redirect flow and return the new session."""
        ...

    async def sign_out(self, access_token: str) -> None:
        """Revoke the session behind an access token."""
        ...

    async def list_users(self) -> list[AuthUser]:
        """List every account."""
        ...

    async def set_banned(self, user_id: UUID, banned: bool) -> AuthUser:
        """Set the banned flag in the account's app metadata."""
        ...

    async def delete_user(self, user_id: UUID) -> None:
        """Permanently delete an account."""
        ...
