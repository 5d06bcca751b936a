"""SQLAlchemy implementation of Message repository."""

from uuid import UUID

from sqlalchemy import distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.match import MatchStatus
from domain.entities.message import Message
from infrastructure.database.models import MatchModel, MessageModel


class SQLAlchemyMessageRepository:
    """SQLAlchemy implementation of IMessageRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_for_match(self, match_id: UUID) -> list[Message]:
        """List a match's messages, oldest first."""
        stmt = (
            select(MessageModel)
            .where(MessageModel.match_id == match_id)
            .order_by(MessageModel.created_at.asc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def count_for_matches(self, match_ids: list[UUID]) -> dict[UUID, int]:
        """Count messages per match in a single query."""
        if not match_ids:
            return {}
        stmt = (
            select(MessageModel.match_id, func.count().label("message_count"))
            .where(MessageModel.match_id.in_(match_ids))
            .group_by(MessageModel.match_id)
        )
        result = await self._session.execute(stmt)
        return {row.match_id: row.message_count for row in result}

    async def count_active_chats(self) -> int:
        """Count matched pairs that have at least one message."""
        stmt = (
            select(func.count(distinct(MessageModel.match_id)))
            .join(MatchModel, MatchModel.id == MessageModel.match_id)
            .where(MatchModel.status == MatchStatus.MATCHED.value)
        )
        result = await self._session.execute(stmt)
        return result.scalar() or 0

    async def create(self, message: Message) -> Message:
        """Insert a message (used by seeding and tests; no public send path)."""
        model = MessageModel(
            id=message.id,
            match_id=message.match_id,
            sender_id=message.sender_id,
            content=message.content,
            created_at=message.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    def _to_entity(self, model: MessageModel) -> Message:
        """Convert ORM model to domain entity."""
        return Message(
            id=model.id,
            match_id=model.match_id,
            sender_id=model.sender_id,
            content=model.content,
            created_at=model.created_at,
        )
