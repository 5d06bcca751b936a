"""Reported content repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.report import ReportedContent, ReportStatus


class IReportRepository(Protocol):
    """Repository interface for ReportedContent entities."""

    async def get(self, id: UUID) -> ReportedContent | None:
        """Get a report by ID."""
        ...

    async def list(self, status: ReportStatus | None = None) -> list[ReportedContent]:
        """List reports newest first, optionally filtered by status."""
        ...

    async def count(self, status: ReportStatus | None = None) -> int:
        """Count reports, optionally filtered by status."""
        ...

    async def create(self, report: ReportedContent) -> ReportedContent:
        """Create a new report."""
        ...

    async def update(self, report: ReportedContent) -> ReportedContent:
        """Persist a report's status."""
        ...
