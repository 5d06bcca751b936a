"""Match service layer for the consumer matches and messages screens."""

from typing import Callable
from uuid import UUID

from core.exceptions import ChatNotEnabledError, MatchNotFoundError
from domain.entities.match import MatchStatus, MatchWithProfile, ProfileSummary
from domain.entities.message import Message
from domain.repositories.unit_of_work import IUnitOfWork


class MatchService:
    """Service layer for a user's own matches."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def list_matches(self, user_id: UUID) -> list[MatchWithProfile]:
        """Matched pairs where the user is either side, with the other profile."""
        async with self._uow_factory() as uow:
            matches = await uow.matches.list_for_user(user_id, status=MatchStatus.MATCHED)
            counterpart_ids = [m.counterpart(user_id) for m in matches]
            profiles = await uow.profiles.get_many(counterpart_ids)

            result = []
            for match in matches:
                other = profiles.get(match.counterpart(user_id))
                if other is None:
                    continue
                result.append(
                    MatchWithProfile(
                        match=match,
                        profile=ProfileSummary(
                            id=other.id,
                            full_name=other.full_name,
                            avatar_url=other.avatar_url,
                            bio=other.bio,
                        ),
                    )
                )
            return result

    async def list_messages(self, user_id: UUID, match_id: UUID) -> list[Message]:
        """Read the message history of one of the user's matches, oldest first.

        Matches the user is not part of are reported as not found.
        """
        async with self._uow_factory() as uow:
            match = await uow.matches.get(match_id)
            if not match or not match.involves(user_id):
                raise MatchNotFoundError(str(match_id))
            if not match.is_chat_enabled:
                raise ChatNotEnabledError(str(match_id))
            return await uow.messages.list_for_match(match_id)  # type: ignore[no-any-return]
