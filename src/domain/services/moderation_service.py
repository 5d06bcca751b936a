"""Moderation service for reported content."""

from typing import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    ProfileNotFoundError,
    ReportAlreadyResolvedError,
    ReportNotFoundError,
    ValidationError,
)
from domain.entities.report import (
    ReportContentType,
    ReportedContent,
    ReportFilter,
    ReportStatus,
    ReportView,
)
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class ModerationService:
    """Service layer for user reports and their resolution."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create_report(
        self,
        reporter_id: UUID,
        reported_user_id: UUID,
        reason: str,
        content_type: ReportContentType,
        content: str = "",
    ) -> ReportedContent:
        """File a report against another user; it starts out pending."""
        if reporter_id == reported_user_id:
            raise ValidationError("You cannot report yourself", field="reported_user_id")
        if not reason.strip():
            raise ValidationError("Please give a reason for the report", field="reason")

        async with self._uow_factory() as uow:
            if not await uow.profiles.get(reported_user_id):
                raise ProfileNotFoundError(str(reported_user_id))

            report = await uow.reports.create(
                ReportedContent(
                    reporter_id=reporter_id,
                    reported_user_id=reported_user_id,
                    reason=reason.strip(),
                    content_type=content_type,
                    content=content,
                )
            )
            await uow.commit()
            logger.info(
                "report_created",
                report_id=str(report.id),
                content_type=content_type.value,
            )
            return report

    async def list_reports(self, filter: ReportFilter = ReportFilter.PENDING) -> list[ReportView]:
        """Reports matching the filter, newest first, with user names attached."""
        status = None if filter == ReportFilter.ALL else ReportStatus(filter.value)
        async with self._uow_factory() as uow:
            reports = await uow.reports.list(status)
            user_ids = {r.reported_user_id for r in reports} | {r.reporter_id for r in reports}
            profiles = await uow.profiles.get_many(list(user_ids))

            views = []
            for report in reports:
                reported = profiles.get(report.reported_user_id)
                reporter = profiles.get(report.reporter_id)
                views.append(
                    ReportView(
                        report=report,
                        reported_user_name=reported.full_name if reported else None,
                        reported_user_avatar_url=reported.avatar_url if reported else None,
                        reporter_name=reporter.full_name if reporter else None,
                    )
                )
            return views

    async def resolve_report(self, report_id: UUID, decision: ReportStatus) -> ReportedContent:
        """Approve or reject a report.

        Re-applying the decision a report already has is a no-op. Changing
        the decision of a resolved report is refused.
        """
        if decision == ReportStatus.PENDING:
            raise ValidationError("Decision must be approved or rejected", field="decision")

        async with self._uow_factory() as uow:
            report = await uow.reports.get(report_id)
            if not report:
                raise ReportNotFoundError(str(report_id))

            if report.status == decision:
                return report
            if report.is_resolved:
                raise ReportAlreadyResolvedError(str(report_id), report.status.value)

            report.status = decision
            updated = await uow.reports.update(report)
            await uow.commit()
            logger.info("report_resolved", report_id=str(report_id), decision=decision.value)
            return updated
