"""Profile domain entity and age derivation."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

from domain.entities.settings import DEFAULT_LOCATION, UserSettings


def calculate_age(birthdate: date, today: date | None = None) -> int:
    """Return the number of complete years between birthdate and today.

    The year difference is decremented when today's month/day falls before
    the birth month/day, i.e. the birthday has not happened yet this year.
    """
    today = today or date.today()
    age = today.year - birthdate.year
    if (today.month, today.day) < (birthdate.month, birthdate.day):
        age -= 1
    return age


@dataclass
class Profile:
    """Domain entity for a dating profile (one per Supabase identity)."""

    id: UUID
    full_name: str = ""
    birthdate: date | None = None
    gender: str | None = None
    bio: str | None = None
    interests: list[str] = field(default_factory=list)
    location: str = DEFAULT_LOCATION
    avatar_url: str | None = None
    occupation: str | None = None
    education: str | None = None
    languages: list[str] = field(default_factory=list)
    verified: bool = False
    settings: UserSettings = field(default_factory=UserSettings)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    def age(self, today: date | None = None) -> int | None:
        """Age derived from birthdate at read time; never stored."""
        if self.birthdate is None:
            return None
        return calculate_age(self.birthdate, today)

    @property
    def is_onboarded(self) -> bool:
        """A profile without a name has not completed onboarding."""
        return bool(self.full_name and self.full_name.strip())


@dataclass(frozen=True, slots=True)
class LikedProfile:
    """Read-only value object: a profile the user liked and when."""

    profile: Profile
    liked_at: datetime
