"""SQLAlchemy implementation of Profile repository."""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import LikedProfile, Profile
from domain.entities.settings import UserSettings
from domain.entities.swipe import SwipeAction
from infrastructure.database.models import ProfileModel, SwipeModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by identity."""
        stmt = select(ProfileModel).where(ProfileModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_many(self, ids: list[UUID]) -> dict[UUID, Profile]:
        """Get several profiles in a single query."""
        if not ids:
            return {}
        stmt = select(ProfileModel).where(ProfileModel.id.in_(ids))
        result = await self._session.execute(stmt)
        return {model.id: self._to_entity(model) for model in result.scalars()}

    async def list_all(self) -> list[Profile]:
        """List every profile, newest first."""
        stmt = select(ProfileModel).order_by(ProfileModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def list_unswiped(self, user_id: UUID) -> list[Profile]:
        """List profiles the user has neither swiped on nor owns."""
        swiped = select(SwipeModel.swiped_id).where(SwipeModel.swiper_id == user_id)
        stmt = (
            select(ProfileModel)
            .where(
                ProfileModel.id != user_id,
                ProfileModel.id.not_in(swiped),
            )
            .order_by(ProfileModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def list_liked_by(self, user_id: UUID) -> list[LikedProfile]:
        """List profiles liked by the user, newest like first."""
        stmt = (
            select(ProfileModel, SwipeModel.created_at)
            .join(SwipeModel, SwipeModel.swiped_id == ProfileModel.id)
            .where(
                SwipeModel.swiper_id == user_id,
                SwipeModel.action == SwipeAction.LIKE.value,
            )
            .order_by(SwipeModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [
            LikedProfile(profile=self._to_entity(model), liked_at=liked_at)
            for model, liked_at in result
        ]

    async def count(self) -> int:
        """Count all profiles."""
        stmt = select(func.count()).select_from(ProfileModel)
        result = await self._session.execute(stmt)
        return result.scalar() or 0

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = self._to_model(profile)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Update an existing profile."""
        stmt = select(ProfileModel).where(ProfileModel.id == profile.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Profile {profile.id} not found")

        model.full_name = profile.full_name
        model.birthdate = profile.birthdate
        model.gender = profile.gender
        model.bio = profile.bio
        model.interests = list(profile.interests)
        model.location = profile.location
        model.avatar_url = profile.avatar_url
        model.occupation = profile.occupation
        model.education = profile.education
        model.languages = list(profile.languages)
        model.verified = profile.verified
        model.settings = profile.settings.to_dict()
        model.updated_at = profile.updated_at

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a profile."""
        stmt = select(ProfileModel).where(ProfileModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            full_name=model.full_name or "",
            birthdate=model.birthdate,
            gender=model.gender,
            bio=model.bio,
            interests=list(model.interests or []),
            location=model.location,
            avatar_url=model.avatar_url,
            occupation=model.occupation,
            education=model.education,
            languages=list(model.languages or []),
            verified=bool(model.verified),
            settings=UserSettings.from_dict(model.settings),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            full_name=entity.full_name,
            birthdate=entity.birthdate,
            gender=entity.gender,
            bio=entity.bio,
            interests=list(entity.interests),
            location=entity.location,
            avatar_url=entity.avatar_url,
            occupation=entity.occupation,
            education=entity.education,
            languages=list(entity.languages),
            verified=entity.verified,
            settings=entity.settings.to_dict(),
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
