"""SQLAlchemy implementation of Reported Content repository."""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.report import ReportContentType, ReportedContent, ReportStatus
from infrastructure.database.models import ReportedContentModel


class SQLAlchemyReportRepository:
    """SQLAlchemy implementation of IReportRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> ReportedContent | None:
        """Get a report by ID."""
        stmt = select(ReportedContentModel).where(ReportedContentModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list(self, status: ReportStatus | None = None) -> list[ReportedContent]:
        """List reports newest first."""
        stmt = select(ReportedContentModel)
        if status is not None:
            stmt = stmt.where(ReportedContentModel.status == status.value)
        stmt = stmt.order_by(ReportedContentModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def count(self, status: ReportStatus | None = None) -> int:
        """Count reports."""
        stmt = select(func.count()).select_from(ReportedContentModel)
        if status is not None:
            stmt = stmt.where(ReportedContentModel.status == status.value)
        result = await self._session.execute(stmt)
        return result.scalar() or 0

    async def create(self, report: ReportedContent) -> ReportedContent:
        """Create a new report."""
        model = ReportedContentModel(
            id=report.id,
            reporter_id=report.reporter_id,
            reported_user_id=report.reported_user_id,
            reason=report.reason,
            content_type=report.content_type.value,
            content=report.content,
            status=report.status.value,
            created_at=report.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, report: ReportedContent) -> ReportedContent:
        """Persist a report's status."""
        stmt = select(ReportedContentModel).where(ReportedContentModel.id == report.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Report {report.id} not found")

        model.status = report.status.value

        await self._session.flush()
        return self._to_entity(model)

    def _to_entity(self, model: ReportedContentModel) -> ReportedContent:
        """Convert ORM model to domain entity."""
        return ReportedContent(
            id=model.id,
            reporter_id=model.reporter_id,
            reported_user_id=model.reported_user_id,
            reason=model.reason,
            content_type=ReportContentType(model.content_type),
            content=model.content,
            status=ReportStatus(model.status),
            created_at=model.created_at,
        )
