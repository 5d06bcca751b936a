"""Back-office service: dashboard stats, match monitoring and user management."""

from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

import structlog

from core.exceptions import MatchNotFoundError, ProfileNotFoundError
from domain.entities.identity import AdminStats, ManagedUser
from domain.entities.match import Match, MatchOverview, MatchStatus, ProfileSummary
from domain.entities.message import MessageWithSender
from domain.entities.profile import Profile
from domain.entities.report import ReportStatus
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.auth.provider import IIdentityService

logger = structlog.get_logger()

_UNKNOWN_USER = "Unknown user"


def _summary(user_id: UUID, profile: Optional[Profile]) -> ProfileSummary:
    if profile is None:
        return ProfileSummary(id=user_id, full_name=_UNKNOWN_USER)
    return ProfileSummary(
        id=profile.id,
        full_name=profile.full_name,
        avatar_url=profile.avatar_url,
        bio=profile.bio,
    )


class AdminService:
    """Service layer for the moderation console."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        identity: IIdentityService,
    ) -> None:
        self._uow_factory = uow_factory
        self._identity = identity

    async def get_stats(self) -> AdminStats:
        async with self._uow_factory() as uow:
            return AdminStats(
                total_users=await uow.profiles.count(),
                total_matches=await uow.matches.count_by_status(MatchStatus.MATCHED),
                active_chats=await uow.messages.count_active_chats(),
                reported_content=await uow.reports.count(ReportStatus.PENDING),
            )

    async def list_users(self, search: Optional[str] = None) -> list[ManagedUser]:
        """Profiles newest first, joined with their auth accounts.

        The optional search is a case-insensitive substring match on the
        name or the email address.
        """
        async with self._uow_factory() as uow:
            profiles = await uow.profiles.list_all()

        accounts = {user.id: user for user in await self._identity.list_users()}

        users = []
        for profile in sorted(profiles, key=lambda p: p.created_at, reverse=True):
            account = accounts.get(profile.id)
            users.append(
                ManagedUser(
                    id=profile.id,
                    full_name=profile.full_name,
                    email=account.email if account else None,
                    created_at=profile.created_at,
                    last_sign_in_at=account.last_sign_in_at if account else None,
                    banned=account.banned if account else False,
                    verified=profile.verified,
                )
            )

        if search and search.strip():
            needle = search.strip().lower()
            users = [
                u
                for u in users
                if needle in u.full_name.lower() or needle in (u.email or "").lower()
            ]
        return users

    async def verify_user(self, user_id: UUID) -> Profile:
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))

            updated = await uow.profiles.update(
                replace(profile, verified=True, updated_at=datetime.utcnow())
            )
            await uow.commit()
            logger.info("user_verified", user_id=str(user_id))
            return updated

    async def ban_user(self, user_id: UUID) -> None:
        await self._identity.set_banned(user_id, True)
        logger.info("user_banned", user_id=str(user_id))

    async def delete_user(self, user_id: UUID) -> None:
        """Delete the auth account and the profile. Irreversible."""
        await self._identity.delete_user(user_id)
        async with self._uow_factory() as uow:
            await uow.profiles.delete(user_id)
            await uow.commit()
        logger.info("user_deleted", user_id=str(user_id))

    async def list_matches_with_messages(self) -> list[MatchOverview]:
        """Every match newest first, with both profiles and a message count."""
        async with self._uow_factory() as uow:
            matches = await uow.matches.list_all()
            user_ids = {m.user_id for m in matches} | {m.matched_user_id for m in matches}
            profiles = await uow.profiles.get_many(list(user_ids))
            counts = await uow.messages.count_for_matches([m.id for m in matches])

            return [
                MatchOverview(
                    match=match,
                    user=_summary(match.user_id, profiles.get(match.user_id)),
                    matched_user=_summary(
                        match.matched_user_id, profiles.get(match.matched_user_id)
                    ),
                    messages_count=counts.get(match.id, 0),
                )
                for match in matches
            ]

    async def get_match_messages(self, match_id: UUID) -> list[MessageWithSender]:
        """Full message history of a match, oldest first."""
        async with self._uow_factory() as uow:
            if not await uow.matches.get(match_id):
                raise MatchNotFoundError(str(match_id))

            messages = await uow.messages.list_for_match(match_id)
            senders = await uow.profiles.get_many(list({m.sender_id for m in messages}))

            result = []
            for message in messages:
                sender = senders.get(message.sender_id)
                result.append(
                    MessageWithSender(
                        message=message,
                        sender_name=sender.full_name if sender else _UNKNOWN_USER,
                        sender_avatar_url=sender.avatar_url if sender else None,
                    )
                )
            return result

    async def unmatch(self, match_id: UUID) -> Match:
        """Move a match to the terminal unmatched state."""
        async with self._uow_factory() as uow:
            match = await uow.matches.get(match_id)
            if not match:
                raise MatchNotFoundError(str(match_id))

            match.transition_to(MatchStatus.UNMATCHED)
            updated = await uow.matches.update(match)
            await uow.commit()
            logger.info("match_unmatched", match_id=str(match_id))
            return updated
