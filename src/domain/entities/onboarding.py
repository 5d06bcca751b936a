"""Onboarding form data and its five-step validation."""

from dataclasses import dataclass, field
from datetime import date

from core.exceptions import UnderageError, ValidationError
from domain.entities.profile import calculate_age
from domain.entities.settings import DEFAULT_LOCATION

ONBOARDING_STEPS = 5


def normalize_tags(tags: list[str]) -> list[str]:
    """Drop blanks and duplicates while keeping selection order."""
    seen: dict[str, None] = {}
    for tag in tags:
        tag = tag.strip()
        if tag:
            seen.setdefault(tag, None)
    return list(seen)


@dataclass
class OnboardingData:
    """Fields collected across the onboarding steps."""

    full_name: str = ""
    birthdate: date | None = None
    gender: str = ""
    bio: str = ""
    interests: list[str] = field(default_factory=list)
    location: str = DEFAULT_LOCATION
    languages: list[str] = field(default_factory=list)


def validate_step(
    step: int,
    data: OnboardingData,
    minimum_age: int = 18,
    today: date | None = None,
) -> None:
    """Validate one onboarding step.

    Steps: 1 name, 2 birthdate and age, 3 gender, 4 interests, 5 languages.

    Raises:
        ValidationError: If a required field is missing or the step is unknown.
        UnderageError: If the birthdate yields an age below minimum_age.
    """
    if step == 1:
        if not data.full_name.strip():
            raise ValidationError("Please enter your name", field="full_name", step=step)
    elif step == 2:
        if data.birthdate is None:
            raise ValidationError("Please enter your birthdate", field="birthdate", step=step)
        if calculate_age(data.birthdate, today) < minimum_age:
            raise UnderageError(minimum_age, step=step)
    elif step == 3:
        if not data.gender:
            raise ValidationError("Please select your gender", field="gender", step=step)
    elif step == 4:
        if not normalize_tags(data.interests):
            raise ValidationError(
                "Please select at least one interest", field="interests", step=step
            )
    elif step == 5:
        if not normalize_tags(data.languages):
            raise ValidationError(
                "Please select at least one language", field="languages", step=step
            )
    else:
        raise ValidationError(f"Unknown onboarding step: {step}", field="step")


def validate_all(
    data: OnboardingData,
    minimum_age: int = 18,
    today: date | None = None,
) -> None:
    """Run every step's validation in order; the first failure wins."""
    for step in range(1, ONBOARDING_STEPS + 1):
        validate_step(step, data, minimum_age=minimum_age, today=today)
