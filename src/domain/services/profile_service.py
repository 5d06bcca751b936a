"""Profile service layer: lazy creation, editing, onboarding, avatars, settings."""

from dataclasses import replace
from datetime import date, datetime
from typing import Any, Callable, Optional
from uuid import UUID

import structlog

from core.exceptions import ProfileNotFoundError, UnderageError, ValidationError
from domain.entities.onboarding import (
    OnboardingData,
    normalize_tags,
    validate_all,
    validate_step,
)
from domain.entities.profile import LikedProfile, Profile, calculate_age
from domain.entities.settings import DEFAULT_LOCATION, UserSettings
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.auth.provider import IIdentityService
from infrastructure.storage.provider import IObjectStorage

logger = structlog.get_logger()

_UPDATABLE_FIELDS = frozenset(
    {
        "full_name",
        "birthdate",
        "gender",
        "bio",
        "interests",
        "location",
        "occupation",
        "education",
        "languages",
    }
)

_SETTINGS_FIELDS = frozenset(
    {
        "email_notifications",
        "push_notifications",
        "visibility",
        "location",
        "max_distance_miles",
    }
)


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        storage: Optional[IObjectStorage] = None,
        identity: Optional[IIdentityService] = None,
        avatars_bucket: str = "avatars",
        default_location: str = DEFAULT_LOCATION,
        minimum_age: int = 18,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._uow_factory = uow_factory
        self._storage = storage
        self._identity = identity
        self._avatars_bucket = avatars_bucket
        self._default_location = default_location
        self._minimum_age = minimum_age
        self._clock = clock

    async def get_or_create_profile(
        self, user_id: UUID, full_name: Optional[str] = None
    ) -> Profile:
        """Fetch the user's profile, creating a minimal default on first access."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(user_id)
            if profile:
                return profile

            created = await uow.profiles.create(
                Profile(
                    id=user_id,
                    full_name=full_name or "",
                    location=self._default_location,
                    interests=[],
                    languages=[],
                )
            )
            await uow.commit()
            logger.info("profile_created", user_id=str(user_id))
            return created

    async def get_profile(self, user_id: UUID) -> Profile:
        """Fetch an existing profile."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))
            return profile

    async def update_profile(self, user_id: UUID, changes: dict[str, Any]) -> Profile:
        """Merge changes into the stored profile and stamp updated_at.

        Unknown keys are rejected. A failed write rolls back and leaves the
        previous profile untouched.
        """
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(
                f"Unknown profile fields: {', '.join(sorted(unknown))}",
                field=sorted(unknown)[0],
            )

        birthdate = changes.get("birthdate")
        if birthdate is not None:
            self._check_age(birthdate)
        if "full_name" in changes and not (changes["full_name"] or "").strip():
            raise ValidationError("Please enter your name", field="full_name")
        if "location" in changes and not (changes["location"] or "").strip():
            raise ValidationError("Please enter your location", field="location")

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))

            for name, value in changes.items():
                if name in ("interests", "languages"):
                    value = normalize_tags(value or [])
                setattr(profile, name, value)
            profile.updated_at = datetime.utcnow()

            updated = await uow.profiles.update(profile)
            await uow.commit()
            return updated

    async def upload_avatar(
        self,
        user_id: UUID,
        filename: str,
        data: bytes,
        content_type: str,
    ) -> Profile:
        """Store an avatar image under "{user_id}.{ext}" and link it on the profile.

        The blob write and the profile update are two separate steps. If the
        profile update fails the uploaded blob stays in the bucket.
        """
        if self._storage is None:
            raise RuntimeError("ProfileService was created without object storage")
        if not data:
            raise ValidationError("Uploaded file is empty", field="file")
        if not content_type.startswith("image/"):
            raise ValidationError("Avatar must be an image", field="file")

        async with self._uow_factory() as uow:
            if not await uow.profiles.get(user_id):
                raise ProfileNotFoundError(str(user_id))

        extension = filename.rsplit(".", 1)[-1].lower() if "." in filename else "jpg"
        key = f"{user_id}.{extension}"
        await self._storage.upload(
            self._avatars_bucket, key, data, content_type=content_type, upsert=True
        )
        public_url = self._storage.get_public_url(self._avatars_bucket, key)

        try:
            async with self._uow_factory() as uow:
                profile = await uow.profiles.get(user_id)
                if not profile:
                    raise ProfileNotFoundError(str(user_id))
                profile.avatar_url = public_url
                profile.updated_at = datetime.utcnow()
                updated = await uow.profiles.update(profile)
                await uow.commit()
                return updated
        except Exception:
            logger.error(
                "avatar_profile_update_failed",
                user_id=str(user_id),
                key=key,
                exc_info=True,
            )
            raise

    def validate_onboarding_step(self, step: int, data: OnboardingData) -> None:
        """Validate a single onboarding step without touching storage."""
        validate_step(step, data, minimum_age=self._minimum_age, today=self._clock())

    async def complete_onboarding(self, user_id: UUID, data: OnboardingData) -> Profile:
        """Validate all five steps, then write the onboarding fields to the profile.

        Existing profile content is replaced by the onboarding answers; the
        avatar, verification flag and settings are kept.
        """
        validate_all(data, minimum_age=self._minimum_age, today=self._clock())

        async with self._uow_factory() as uow:
            existing = await uow.profiles.get(user_id)
            fields = dict(
                full_name=data.full_name.strip(),
                birthdate=data.birthdate,
                gender=data.gender,
                bio=data.bio,
                interests=normalize_tags(data.interests),
                location=data.location or self._default_location,
                languages=normalize_tags(data.languages),
                occupation=None,
                education=None,
            )
            if existing:
                profile = await uow.profiles.update(
                    replace(existing, updated_at=datetime.utcnow(), **fields)
                )
            else:
                profile = await uow.profiles.create(Profile(id=user_id, **fields))
            await uow.commit()

        logger.info("onboarding_completed", user_id=str(user_id))
        return profile

    async def get_liked_profiles(self, user_id: UUID) -> list[LikedProfile]:
        """Profiles the user liked, newest like first."""
        async with self._uow_factory() as uow:
            return await uow.profiles.list_liked_by(user_id)  # type: ignore[no-any-return]

    async def get_settings(self, user_id: UUID) -> UserSettings:
        """Return the user's settings, creating the profile on first access."""
        profile = await self.get_or_create_profile(user_id)
        return profile.settings

    async def update_settings(self, user_id: UUID, changes: dict[str, Any]) -> UserSettings:
        """Apply a partial settings update."""
        unknown = set(changes) - _SETTINGS_FIELDS
        if unknown:
            raise ValidationError(
                f"Unknown settings: {', '.join(sorted(unknown))}",
                field=sorted(unknown)[0],
            )

        await self.get_or_create_profile(user_id)
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))
            try:
                profile.settings = replace(profile.settings, **changes)
            except ValueError as e:
                raise ValidationError(str(e), field=next(iter(changes), None)) from e
            profile.updated_at = datetime.utcnow()
            updated = await uow.profiles.update(profile)
            await uow.commit()
            return updated.settings

    async def delete_account(self, user_id: UUID) -> None:
        """Delete the profile and the identity-service account. Irreversible."""
        async with self._uow_factory() as uow:
            await uow.profiles.delete(user_id)
            await uow.commit()

        if self._identity is not None:
            await self._identity.delete_user(user_id)
        logger.info("account_deleted", user_id=str(user_id))

    def _check_age(self, birthdate: date) -> None:
        if calculate_age(birthdate, self._clock()) < self._minimum_age:
            raise UnderageError(self._minimum_age)
