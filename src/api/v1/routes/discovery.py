"""Discovery API routes: candidate feed and swipes."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_discovery_service
from api.v1.schemas.discovery import (
    CandidateListResponse,
    CandidateResponse,
    SwipeCreate,
    SwipeResponse,
    SwipeResultDetailResponse,
    SwipeResultResponse,
)
from api.v1.schemas.profile import ProfileResponse
from core.rate_limit import limiter
from domain.services.discovery_service import DiscoveryService

router = APIRouter(prefix="/discovery", tags=["discovery"])


@router.get(
    "/candidates",
    response_model=CandidateListResponse,
    summary="Fetch candidate feed",
    responses={404: {"description": "Requesting user has no profile"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_candidates(
    request: Request,
    user: CurrentUser,
    service: DiscoveryService = Depends(get_discovery_service),
) -> CandidateListResponse:
    """
    Ranked profiles the user has not swiped on yet.

    The client walks the list locally, one position per swipe, and fetches a
    new feed once it is exhausted.
    """
    feed = await service.fetch_candidates(user.id)
    return CandidateListResponse(
        data=[
            CandidateResponse(
                profile=ProfileResponse.from_entity(candidate.profile),
                match_score=candidate.match_score,
            )
            for candidate in feed.candidates
        ],
        total=len(feed),
    )


@router.post(
    "/swipes",
    response_model=SwipeResultDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a swipe",
    responses={
        201: {"description": "Swipe recorded; is_match reports a mutual like"},
        400: {"description": "Self-swipe"},
        404: {"description": "Swiped profile not found"},
        409: {"description": "Already swiped on this profile"},
    },
)
@limiter.limit("60/minute")  # type: ignore[untyped-decorator]
async def record_swipe(
    request: Request,
    body: SwipeCreate,
    user: CurrentUser,
    service: DiscoveryService = Depends(get_discovery_service),
) -> SwipeResultDetailResponse:
    """Like or pass on a profile. A like that completes a mutual pair creates a match."""
    result = await service.record_swipe(user.id, body.swiped_id, body.action)
    swipe = result.swipe
    return SwipeResultDetailResponse(
        data=SwipeResultResponse(
            swipe=SwipeResponse(
                id=swipe.id,
                swiper_id=swipe.swiper_id,
                swiped_id=swipe.swiped_id,
                action=swipe.action,
                created_at=swipe.created_at,
            ),
            is_match=result.is_match,
            match_id=result.match.id if result.match else None,
            match_status=result.match.status if result.match else None,
            message=result.message,
        )
    )
