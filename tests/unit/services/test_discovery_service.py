"""Unit tests for DiscoveryService."""

from uuid import UUID, uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from core.exceptions import AlreadySwipedError, ProfileNotFoundError, ValidationError
from domain.entities.match import Match, MatchStatus
from domain.entities.profile import Profile
from domain.entities.settings import ProfileVisibility, UserSettings
from domain.entities.swipe import Swipe, SwipeAction
from domain.services.discovery_service import MATCH_MESSAGE, DiscoveryService
from tests.unit.conftest import FakeUnitOfWork


def _echo(entity):
    return entity


@pytest.fixture
def service(uow: FakeUnitOfWork) -> DiscoveryService:
    uow.swipes.create.side_effect = _echo
    uow.matches.create.side_effect = _echo
    uow.matches.update.side_effect = _echo
    return DiscoveryService(lambda: uow)


def _likes(*pairs: tuple[UUID, UUID]):
    """Build an ``exists`` side effect answering True for the given like pairs."""
    liked = set(pairs)

    async def exists(swiper_id: UUID, swiped_id: UUID, action: SwipeAction) -> bool:
        return action == SwipeAction.LIKE and (swiper_id, swiped_id) in liked

    return exists


# --- fetch_candidates ---


class TestFetchCandidates:
    @pytest.mark.asyncio
    async def test_ranks_unswiped_profiles(
        self, service: DiscoveryService, uow: FakeUnitOfWork, user_id: UUID
    ):
        viewer = Profile(id=user_id, interests=["Music", "Travel"], languages=["English"])
        weak = Profile(id=uuid4(), interests=["Chess"])
        strong = Profile(id=uuid4(), interests=["Music"], languages=["English"])
        uow.profiles.get.return_value = viewer
        uow.profiles.list_unswiped.return_value = [weak, strong]

        feed = await service.fetch_candidates(user_id)

        assert [c.profile.id for c in feed.candidates] == [strong.id, weak.id]
        assert feed.candidates[0].match_score == 2
        assert feed.index == 0
        uow.profiles.list_unswiped.assert_called_once_with(user_id)

    @pytest.mark.asyncio
    async def test_hides_profiles_not_visible_to_everyone(
        self, service: DiscoveryService, uow: FakeUnitOfWork, user_id: UUID
    ):
        visible = Profile(id=uuid4())
        hidden = Profile(id=uuid4(), settings=UserSettings(visibility=ProfileVisibility.HIDDEN))
        private = Profile(
            id=uuid4(), settings=UserSettings(visibility=ProfileVisibility.MATCHES_ONLY)
        )
        uow.profiles.get.return_value = Profile(id=user_id)
        uow.profiles.list_unswiped.return_value = [visible, hidden, private]

        feed = await service.fetch_candidates(user_id)

        assert [c.profile.id for c in feed.candidates] == [visible.id]

    @pytest.mark.asyncio
    async def test_requires_viewer_profile(
        self, service: DiscoveryService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.get.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.fetch_candidates(user_id)

    @pytest.mark.asyncio
    async def test_empty_feed_is_exhausted(
        self, service: DiscoveryService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.get.return_value = Profile(id=user_id)
        uow.profiles.list_unswiped.return_value = []

        feed = await service.fetch_candidates(user_id)

        assert feed.is_exhausted


# --- record_swipe ---


class TestRecordSwipe:
    @pytest.fixture(autouse=True)
    def _target_exists(self, uow: FakeUnitOfWork, other_id: UUID):
        uow.profiles.get.return_value = Profile(id=other_id)
        uow.swipes.get_pair.return_value = None
        uow.matches.get_between.return_value = None

    @pytest.mark.asyncio
    async def test_dislike_records_without_match_evaluation(
        self, service: DiscoveryService, uow: FakeUnitOfWork, user_id: UUID, other_id: UUID
    ):
        result = await service.record_swipe(user_id, other_id, SwipeAction.DISLIKE)

        assert result.swipe.action == SwipeAction.DISLIKE
        assert result.is_match is False
        assert result.match is None
        assert result.message is None
        uow.matches.create.assert_not_called()
        assert uow.committed

    @pytest.mark.asyncio
    async def test_one_sided_like_creates_pending_match(
        self, service: DiscoveryService, uow: FakeUnitOfWork, user_id: UUID, other_id: UUID
    ):
        uow.swipes.exists.side_effect = _likes((user_id, other_id))

        result = await service.record_swipe(user_id, other_id, SwipeAction.LIKE)

        assert result.is_match is False
        assert result.match is not None
        assert result.match.status == MatchStatus.PENDING
        assert result.match.user_id == user_id

    @pytest.mark.asyncio
    async def test_mutual_like_creates_matched_row(
        self, service: DiscoveryService, uow: FakeUnitOfWork, user_id: UUID, other_id: UUID
    ):
        uow.swipes.exists.side_effect = _likes((user_id, other_id), (other_id, user_id))

        result = await service.record_swipe(user_id, other_id, SwipeAction.LIKE)

        assert result.is_match is True
        assert result.match is not None
        assert result.match.status == MatchStatus.MATCHED
        assert result.message == MATCH_MESSAGE

    @pytest.mark.asyncio
    async def test_mutual_like_promotes_pending_match(
        self, service: DiscoveryService, uow: FakeUnitOfWork, user_id: UUID, other_id: UUID
    ):
        pending = Match(user_id=other_id, matched_user_id=user_id)
        uow.matches.get_between.return_value = pending
        uow.swipes.exists.side_effect = _likes((user_id, other_id), (other_id, user_id))

        result = await service.record_swipe(user_id, other_id, SwipeAction.LIKE)

        assert result.is_match is True
        assert result.match is pending
        assert pending.status == MatchStatus.MATCHED
        uow.matches.update.assert_called_once_with(pending)
        uow.matches.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_unmatched_pair_is_not_resurrected(
        self, service: DiscoveryService, uow: FakeUnitOfWork, user_id: UUID, other_id: UUID
    ):
        unmatched = Match(
            user_id=other_id, matched_user_id=user_id, status=MatchStatus.UNMATCHED
        )
        uow.matches.get_between.return_value = unmatched
        uow.swipes.exists.side_effect = _likes((user_id, other_id), (other_id, user_id))

        result = await service.record_swipe(user_id, other_id, SwipeAction.LIKE)

        assert result.is_match is False
        assert unmatched.status == MatchStatus.UNMATCHED
        uow.matches.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_duplicate_swipe_conflicts(
        self, service: DiscoveryService, uow: FakeUnitOfWork, user_id: UUID, other_id: UUID
    ):
        uow.swipes.get_pair.return_value = Swipe(
            swiper_id=user_id, swiped_id=other_id, action=SwipeAction.DISLIKE
        )

        with pytest.raises(AlreadySwipedError):
            await service.record_swipe(user_id, other_id, SwipeAction.LIKE)

        uow.swipes.create.assert_not_called()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_swipe_conflicts(
        self, service: DiscoveryService, uow: FakeUnitOfWork, user_id: UUID, other_id: UUID
    ):
        """The pair check passed, but another request inserted the same swipe first."""
        uow.swipes.create.side_effect = IntegrityError(
            "INSERT ...",
            {},
            Exception("UNIQUE constraint failed: swipes.swiper_id, swipes.swiped_id"),
        )

        with pytest.raises(AlreadySwipedError) as exc_info:
            await service.record_swipe(user_id, other_id, SwipeAction.LIKE)

        assert exc_info.value.details == {"swiped_id": str(other_id)}
        assert uow.rolled_back
        assert not uow.committed
        uow.matches.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_non_unique_integrity_error_is_reraised(
        self, service: DiscoveryService, uow: FakeUnitOfWork, user_id: UUID, other_id: UUID
    ):
        uow.swipes.create.side_effect = IntegrityError(
            "INSERT ...", {}, Exception("FOREIGN KEY constraint failed")
        )

        with pytest.raises(IntegrityError):
            await service.record_swipe(user_id, other_id, SwipeAction.LIKE)

    @pytest.mark.asyncio
    async def test_mutual_like_promotes_concurrently_stored_pending_row(
        self, service: DiscoveryService, uow: FakeUnitOfWork, user_id: UUID, other_id: UUID
    ):
        """create hands back the pair's existing pending row when it lost the insert."""
        pending = Match(user_id=other_id, matched_user_id=user_id)
        uow.matches.create.side_effect = None
        uow.matches.create.return_value = pending
        uow.swipes.exists.side_effect = _likes((user_id, other_id), (other_id, user_id))

        result = await service.record_swipe(user_id, other_id, SwipeAction.LIKE)

        assert result.is_match is True
        assert result.match is pending
        assert pending.status == MatchStatus.MATCHED
        uow.matches.update.assert_called_once_with(pending)

    @pytest.mark.asyncio
    async def test_self_swipe_rejected(
        self, service: DiscoveryService, uow: FakeUnitOfWork, user_id: UUID
    ):
        with pytest.raises(ValidationError):
            await service.record_swipe(user_id, user_id, SwipeAction.LIKE)

        uow.swipes.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_target_rejected(
        self, service: DiscoveryService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.get.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.record_swipe(user_id, uuid4(), SwipeAction.LIKE)


# --- is_mutual_match ---


class TestIsMutualMatch:
    @pytest.mark.asyncio
    async def test_true_only_when_both_liked(
        self, service: DiscoveryService, uow: FakeUnitOfWork, user_id: UUID, other_id: UUID
    ):
        uow.swipes.exists.side_effect = _likes((user_id, other_id))
        assert await service.is_mutual_match(user_id, other_id) is False

        uow.swipes.exists.side_effect = _likes((user_id, other_id), (other_id, user_id))
        assert await service.is_mutual_match(user_id, other_id) is True
