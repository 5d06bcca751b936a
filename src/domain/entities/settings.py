"""User settings schema.

Every setting is an explicit, typed field; there is no string-keyed lookup.
"""

from dataclasses import asdict, dataclass, fields
from enum import StrEnum
from typing import Any

DEFAULT_LOCATION = "El Paso, TX"

DISTANCE_OPTIONS: tuple[int, ...] = (5, 10, 25, 50, 100)


class ProfileVisibility(StrEnum):
    """Who can see a profile in discovery."""

    EVERYONE = "everyone"
    MATCHES_ONLY = "matches_only"
    HIDDEN = "hidden"


@dataclass
class UserSettings:
    """Per-user preferences stored alongside the profile."""

    email_notifications: bool = True
    push_notifications: bool = False
    visibility: ProfileVisibility = ProfileVisibility.EVERYONE
    location: str = DEFAULT_LOCATION
    max_distance_miles: int = 25

    def __post_init__(self) -> None:
        self.visibility = ProfileVisibility(self.visibility)
        if self.max_distance_miles not in DISTANCE_OPTIONS:
            raise ValueError(
                f"max_distance_miles must be one of {DISTANCE_OPTIONS}, "
                f"got {self.max_distance_miles}"
            )

    @property
    def is_discoverable(self) -> bool:
        """Only profiles visible to everyone appear in other users' feeds."""
        return self.visibility == ProfileVisibility.EVERYONE

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["visibility"] = self.visibility.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "UserSettings":
        """Build settings from stored JSON, ignoring unknown keys."""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})
