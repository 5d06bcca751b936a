"""Unit of Work protocol."""

from typing import Protocol

from domain.repositories.match_repository import IMatchRepository
from domain.repositories.message_repository import IMessageRepository
from domain.repositories.profile_repository import IProfileRepository
from domain.repositories.report_repository import IReportRepository
from domain.repositories.swipe_repository import ISwipeRepository


class IUnitOfWork(Protocol):
    """Unit of Work interface for managing transactions."""

    profiles: IProfileRepository
    swipes: ISwipeRepository
    matches: IMatchRepository
    messages: IMessageRepository
    reports: IReportRepository

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        ...

    async def __aenter__(self) -> "IUnitOfWork":
        """Enter the context manager."""
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Exit the context manager."""
        ...
