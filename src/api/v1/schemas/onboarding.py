"""Pydantic schemas for the onboarding flow."""

from datetime import date

from pydantic import BaseModel, Field

from api.v1.schemas.profile import ProfileResponse
from domain.entities.onboarding import OnboardingData
from domain.entities.settings import DEFAULT_LOCATION


class OnboardingRequest(BaseModel):
    """Answers collected over the five onboarding steps.

    Every field is optional at the schema level; the per-step rules produce
    the user-facing messages.
    """

    full_name: str = Field("", max_length=100)
    birthdate: date | None = None
    gender: str = Field("", max_length=50)
    bio: str = Field("", max_length=500)
    interests: list[str] = Field(default_factory=list)
    location: str = Field(DEFAULT_LOCATION, max_length=100)
    languages: list[str] = Field(default_factory=list)

    def to_data(self) -> OnboardingData:
        return OnboardingData(
            full_name=self.full_name,
            birthdate=self.birthdate,
            gender=self.gender,
            bio=self.bio,
            interests=list(self.interests),
            location=self.location,
            languages=list(self.languages),
        )


class OnboardingResult(BaseModel):
    profile: ProfileResponse
    redirect_to: str = "/dashboard"


class OnboardingResponse(BaseModel):
    """Schema for a completed onboarding."""

    data: OnboardingResult


class StepValidationResult(BaseModel):
    step: int
    valid: bool = True


class StepValidationResponse(BaseModel):
    data: StepValidationResult
