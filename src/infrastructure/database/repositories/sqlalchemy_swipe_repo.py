"""SQLAlchemy implementation of Swipe repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.swipe import Swipe, SwipeAction
from infrastructure.database.models import SwipeModel


class SQLAlchemySwipeRepository:
    """SQLAlchemy implementation of ISwipeRepository.

    Swipes are never updated or deleted through this repository.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, swipe: Swipe) -> Swipe:
        """Append a swipe record."""
        model = SwipeModel(
            id=swipe.id,
            swiper_id=swipe.swiper_id,
            swiped_id=swipe.swiped_id,
            action=swipe.action.value,
            created_at=swipe.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def get_pair(self, swiper_id: UUID, swiped_id: UUID) -> Swipe | None:
        """Get the swipe swiper_id made on swiped_id."""
        stmt = select(SwipeModel).where(
            SwipeModel.swiper_id == swiper_id,
            SwipeModel.swiped_id == swiped_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def exists(self, swiper_id: UUID, swiped_id: UUID, action: SwipeAction) -> bool:
        """Check for a swipe with the given action."""
        stmt = (
            select(SwipeModel.id)
            .where(
                SwipeModel.swiper_id == swiper_id,
                SwipeModel.swiped_id == swiped_id,
                SwipeModel.action == action.value,
            )
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    def _to_entity(self, model: SwipeModel) -> Swipe:
        """Convert ORM model to domain entity."""
        return Swipe(
            id=model.id,
            swiper_id=model.swiper_id,
            swiped_id=model.swiped_id,
            action=SwipeAction(model.action),
            created_at=model.created_at,
        )
