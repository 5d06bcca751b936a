"""Pydantic schemas for user settings."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.settings import ProfileVisibility, UserSettings

DistanceMiles = Literal[5, 10, 25, 50, 100]


class SettingsResponse(BaseModel):
    """Schema for the user's settings."""

    model_config = ConfigDict(from_attributes=True)

    email_notifications: bool
    push_notifications: bool
    visibility: ProfileVisibility
    location: str
    max_distance_miles: int

    @classmethod
    def from_entity(cls, user_settings: UserSettings) -> "SettingsResponse":
        return cls(**user_settings.to_dict())


class SettingsUpdate(BaseModel):
    """Schema for a partial settings update."""

    email_notifications: bool | None = None
    push_notifications: bool | None = None
    visibility: ProfileVisibility | None = None
    location: str | None = Field(None, min_length=1, max_length=100)
    max_distance_miles: DistanceMiles | None = None


class SettingsDetailResponse(BaseModel):
    data: SettingsResponse
