"""Match API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_match_service
from api.v1.schemas.common import ProfileSummaryResponse
from api.v1.schemas.match import (
    MatchListResponse,
    MatchResponse,
    MessageListResponse,
    MessageResponse,
)
from core.rate_limit import limiter
from domain.services.match_service import MatchService

router = APIRouter(prefix="/matches", tags=["matches"])


@router.get(
    "",
    response_model=MatchListResponse,
    summary="List matches",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_matches(
    request: Request,
    user: CurrentUser,
    service: MatchService = Depends(get_match_service),
) -> MatchListResponse:
    """Mutual matches of the authenticated user, with the other person's profile."""
    matches = await service.list_matches(user.id)
    return MatchListResponse(
        data=[
            MatchResponse(
                id=item.match.id,
                status=item.match.status,
                created_at=item.match.created_at,
                profile=ProfileSummaryResponse(
                    id=item.profile.id,
                    full_name=item.profile.full_name,
                    avatar_url=item.profile.avatar_url,
                    bio=item.profile.bio,
                ),
            )
            for item in matches
        ]
    )


@router.get(
    "/{match_id}/messages",
    response_model=MessageListResponse,
    summary="Get match messages",
    responses={
        400: {"description": "Chat is not enabled for this match"},
        404: {"description": "Match not found"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_messages(
    request: Request,
    match_id: UUID,
    user: CurrentUser,
    service: MatchService = Depends(get_match_service),
) -> MessageListResponse:
    """Message history of a matched pair, oldest first."""
    messages = await service.list_messages(user.id, match_id)
    return MessageListResponse(
        data=[MessageResponse.model_validate(message) for message in messages]
    )
