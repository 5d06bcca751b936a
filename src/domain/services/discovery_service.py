"""Discovery service: candidate feed, swipe recording and match evaluation."""

from dataclasses import dataclass
from typing import Callable, Optional
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import AlreadySwipedError, ProfileNotFoundError, ValidationError
from domain.entities.feed import CandidateFeed, rank_candidates
from domain.entities.match import Match, MatchStatus
from domain.entities.swipe import Swipe, SwipeAction
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

MATCH_MESSAGE = "It's a match!"


@dataclass(frozen=True, slots=True)
class SwipeResult:
    """Outcome of a swipe: the stored record and any match it produced."""

    swipe: Swipe
    is_match: bool
    match: Optional[Match] = None

    @property
    def message(self) -> Optional[str]:
        return MATCH_MESSAGE if self.is_match else None


class DiscoveryService:
    """Service layer for swipe-based discovery."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def fetch_candidates(self, user_id: UUID) -> CandidateFeed:
        """Build the ranked feed of profiles the user has not evaluated yet.

        Excludes the requester, anyone already swiped on, and profiles whose
        visibility is not "everyone".
        """
        async with self._uow_factory() as uow:
            viewer = await uow.profiles.get(user_id)
            if not viewer:
                raise ProfileNotFoundError(str(user_id))

            profiles = await uow.profiles.list_unswiped(user_id)
            visible = [p for p in profiles if p.settings.is_discoverable]
            return CandidateFeed(candidates=rank_candidates(viewer, visible))

    async def record_swipe(
        self,
        swiper_id: UUID,
        swiped_id: UUID,
        action: SwipeAction,
    ) -> SwipeResult:
        """Append a swipe and, for a like, evaluate and persist a match.

        Raises:
            ValidationError: On a self-swipe.
            ProfileNotFoundError: If the swiped profile does not exist.
            AlreadySwipedError: If this pair was already swiped.
        """
        if swiper_id == swiped_id:
            raise ValidationError("You cannot swipe on yourself", field="swiped_id")

        async with self._uow_factory() as uow:
            if not await uow.profiles.get(swiped_id):
                raise ProfileNotFoundError(str(swiped_id))

            if await uow.swipes.get_pair(swiper_id, swiped_id):
                raise AlreadySwipedError(str(swiped_id))

            try:
                swipe = await uow.swipes.create(
                    Swipe(swiper_id=swiper_id, swiped_id=swiped_id, action=action)
                )
            except IntegrityError as exc:
                await uow.rollback()
                # A concurrent swipe on the same pair won the insert
                orig = str(exc.orig).lower() if exc.orig else ""
                if "unique" in orig or "duplicate" in orig:
                    raise AlreadySwipedError(str(swiped_id)) from exc
                raise

            logger.info(
                "swipe_recorded",
                swiper_id=str(swiper_id),
                swiped_id=str(swiped_id),
                action=action.value,
            )

            result = SwipeResult(swipe=swipe, is_match=False)
            if action == SwipeAction.LIKE:
                result = await self._evaluate_like(uow, swipe)

            await uow.commit()
            return result

    async def is_mutual_match(self, user_a: UUID, user_b: UUID) -> bool:
        """True when both users have liked each other."""
        async with self._uow_factory() as uow:
            return await self._is_mutual(uow, user_a, user_b)

    async def _is_mutual(self, uow: IUnitOfWork, user_a: UUID, user_b: UUID) -> bool:
        return await uow.swipes.exists(
            user_a, user_b, SwipeAction.LIKE
        ) and await uow.swipes.exists(user_b, user_a, SwipeAction.LIKE)

    async def _evaluate_like(self, uow: IUnitOfWork, swipe: Swipe) -> SwipeResult:
        """Create or advance the pair's match row after a like."""
        swiper_id, swiped_id = swipe.swiper_id, swipe.swiped_id
        existing = await uow.matches.get_between(swiper_id, swiped_id)

        if not await self._is_mutual(uow, swiper_id, swiped_id):
            if existing is None:
                pending = await uow.matches.create(
                    Match(user_id=swiper_id, matched_user_id=swiped_id)
                )
                return SwipeResult(swipe=swipe, is_match=False, match=pending)
            return SwipeResult(swipe=swipe, is_match=False, match=existing)

        if existing is None:
            match = await uow.matches.create(
                Match(
                    user_id=swiper_id,
                    matched_user_id=swiped_id,
                    status=MatchStatus.MATCHED,
                )
            )
            if match.status == MatchStatus.PENDING:
                # A concurrent like stored the pair's pending row first
                match.transition_to(MatchStatus.MATCHED)
                match = await uow.matches.update(match)
        elif existing.status == MatchStatus.PENDING:
            existing.transition_to(MatchStatus.MATCHED)
            match = await uow.matches.update(existing)
        else:
            # Already matched, or unmatched by a moderator: never resurrect
            return SwipeResult(
                swipe=swipe,
                is_match=existing.status == MatchStatus.MATCHED,
                match=existing,
            )

        logger.info(
            "match_created",
            match_id=str(match.id),
            user_id=str(match.user_id),
            matched_user_id=str(match.matched_user_id),
        )
        return SwipeResult(swipe=swipe, is_match=True, match=match)
