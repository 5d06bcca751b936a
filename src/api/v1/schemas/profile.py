"""Pydantic schemas for Profile API."""

from datetime import date, datetime
from typing import TYPE_CHECKING
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from domain.entities.profile import Profile


class ProfileResponse(BaseModel):
    """Schema for Profile response. Age is derived, never stored."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "full_name": "Jane Doe",
                "birthdate": "1999-04-02",
                "age": 25,
                "gender": "female",
                "bio": "Coffee first.",
                "interests": ["Music", "Travel"],
                "location": "El Paso, TX",
                "avatar_url": None,
                "occupation": None,
                "education": None,
                "languages": ["English"],
                "verified": False,
                "created_at": "2026-01-28T10:00:00",
                "updated_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    full_name: str
    birthdate: date | None = None
    age: int | None = None
    gender: str | None = None
    bio: str | None = None
    interests: list[str] = Field(default_factory=list)
    location: str
    avatar_url: str | None = None
    occupation: str | None = None
    education: str | None = None
    languages: list[str] = Field(default_factory=list)
    verified: bool = False
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, profile: "Profile") -> "ProfileResponse":
        return cls(
            id=profile.id,
            full_name=profile.full_name,
            birthdate=profile.birthdate,
            age=profile.age(),
            gender=profile.gender,
            bio=profile.bio,
            interests=profile.interests,
            location=profile.location,
            avatar_url=profile.avatar_url,
            occupation=profile.occupation,
            education=profile.education,
            languages=profile.languages,
            verified=profile.verified,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )


class ProfileUpdate(BaseModel):
    """Schema for a partial Profile update. Only sent fields are applied."""

    full_name: str | None = Field(None, min_length=1, max_length=100)
    birthdate: date | None = None
    gender: str | None = Field(None, max_length=50)
    bio: str | None = Field(None, max_length=500)
    interests: list[str] | None = None
    location: str | None = Field(None, min_length=1, max_length=100)
    occupation: str | None = Field(None, max_length=100)
    education: str | None = Field(None, max_length=100)
    languages: list[str] | None = None


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile."""

    data: ProfileResponse


class LikedProfileResponse(BaseModel):
    """A liked profile and when the like happened."""

    profile: ProfileResponse
    liked_at: datetime


class LikedProfileListResponse(BaseModel):
    """Schema for list of liked profiles."""

    data: list[LikedProfileResponse]
