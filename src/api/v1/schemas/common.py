"""Common Pydantic schemas shared across the API."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standardized error response."""

    error_code: str
    message: str
    details: Any | None = None


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str


class ProfileSummaryResponse(BaseModel):
    """Minimal profile data embedded in match and message payloads."""

    id: UUID
    full_name: str
    avatar_url: str | None = None
    bio: str | None = None
