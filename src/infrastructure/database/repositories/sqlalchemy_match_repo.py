"""SQLAlchemy implementation of Match repository."""

from uuid import UUID

from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.match import Match, MatchStatus
from infrastructure.database.models import MatchModel


def pair_key(user_a: UUID, user_b: UUID) -> str:
    """Direction-free key for a pair of profiles."""
    low, high = sorted((str(user_a), str(user_b)))
    return f"{low}:{high}"


class SQLAlchemyMatchRepository:
    """SQLAlchemy implementation of IMatchRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Match | None:
        """Get a match by ID."""
        stmt = select(MatchModel).where(MatchModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_between(self, user_a: UUID, user_b: UUID) -> Match | None:
        """Get the match row for a pair in either direction."""
        stmt = (
            select(MatchModel)
            .where(
                or_(
                    and_(MatchModel.user_id == user_a, MatchModel.matched_user_id == user_b),
                    and_(MatchModel.user_id == user_b, MatchModel.matched_user_id == user_a),
                )
            )
            .order_by(MatchModel.created_at.desc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_for_user(
        self, user_id: UUID, status: MatchStatus | None = None
    ) -> list[Match]:
        """List matches where the user is either side, newest first."""
        stmt = select(MatchModel).where(
            or_(MatchModel.user_id == user_id, MatchModel.matched_user_id == user_id)
        )
        if status is not None:
            stmt = stmt.where(MatchModel.status == status.value)
        stmt = stmt.order_by(MatchModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def list_all(self) -> list[Match]:
        """List every match, newest first."""
        stmt = select(MatchModel).order_by(MatchModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def count_by_status(self, status: MatchStatus) -> int:
        """Count matches in a status."""
        stmt = (
            select(func.count())
            .select_from(MatchModel)
            .where(MatchModel.status == status.value)
        )
        result = await self._session.execute(stmt)
        return result.scalar() or 0

    async def create(self, match: Match) -> Match:
        """Create a match, or return the pair's row if one already exists.

        The insert runs in a savepoint so a lost race on ``uq_matches_pair``
        leaves the surrounding transaction usable.
        """
        model = MatchModel(
            id=match.id,
            user_id=match.user_id,
            matched_user_id=match.matched_user_id,
            pair_key=pair_key(match.user_id, match.matched_user_id),
            status=match.status.value,
            created_at=match.created_at,
            updated_at=match.updated_at,
        )
        try:
            async with self._session.begin_nested():
                self._session.add(model)
        except IntegrityError as exc:
            orig = str(exc.orig).lower() if exc.orig else ""
            if "unique" not in orig and "duplicate" not in orig:
                raise
            existing = await self.get_between(match.user_id, match.matched_user_id)
            if existing is None:
                raise
            return existing

        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, match: Match) -> Match:
        """Persist the status of an existing match."""
        stmt = select(MatchModel).where(MatchModel.id == match.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Match {match.id} not found")

        model.status = match.status.value
        model.updated_at = match.updated_at

        await self._session.flush()
        return self._to_entity(model)

    def _to_entity(self, model: MatchModel) -> Match:
        """Convert ORM model to domain entity."""
        return Match(
            id=model.id,
            user_id=model.user_id,
            matched_user_id=model.matched_user_id,
            status=MatchStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
