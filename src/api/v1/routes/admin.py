"""Back-office API routes. Every route requires the admin role."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import AdminUser
from api.v1.dependencies import get_admin_service, get_moderation_service
from api.v1.schemas.admin import (
    AdminMatchDetailResponse,
    AdminMatchResponse,
    AdminMessageListResponse,
    AdminMessageResponse,
    ManagedUserListResponse,
    ManagedUserResponse,
    MatchOverviewListResponse,
    MatchOverviewResponse,
    StatsDetailResponse,
    StatsResponse,
)
from api.v1.schemas.common import ProfileSummaryResponse
from api.v1.schemas.profile import ProfileDetailResponse, ProfileResponse
from api.v1.schemas.report import (
    ReportDetailResponse,
    ReportListResponse,
    ReportResolve,
    ReportResponse,
)
from core.rate_limit import limiter
from domain.entities.match import ProfileSummary
from domain.entities.report import ReportFilter, ReportView
from domain.services.admin_service import AdminService
from domain.services.moderation_service import ModerationService

router = APIRouter(prefix="/admin", tags=["admin"])


def _summary(profile: ProfileSummary) -> ProfileSummaryResponse:
    return ProfileSummaryResponse(
        id=profile.id,
        full_name=profile.full_name,
        avatar_url=profile.avatar_url,
        bio=profile.bio,
    )


def _report(view: ReportView) -> ReportResponse:
    report = view.report
    return ReportResponse(
        id=report.id,
        reporter_id=report.reporter_id,
        reported_user_id=report.reported_user_id,
        reason=report.reason,
        content_type=report.content_type,
        content=report.content,
        status=report.status,
        created_at=report.created_at,
        reported_user_name=view.reported_user_name,
        reported_user_avatar_url=view.reported_user_avatar_url,
        reporter_name=view.reporter_name,
    )


@router.get(
    "/stats",
    response_model=StatsDetailResponse,
    summary="Dashboard statistics",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_stats(
    request: Request,
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
) -> StatsDetailResponse:
    """Total users, matched pairs, active chats and pending reports."""
    stats = await service.get_stats()
    return StatsDetailResponse(
        data=StatsResponse(
            total_users=stats.total_users,
            total_matches=stats.total_matches,
            active_chats=stats.active_chats,
            reported_content=stats.reported_content,
        )
    )


@router.get(
    "/reports",
    response_model=ReportListResponse,
    summary="List reported content",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_reports(
    request: Request,
    admin: AdminUser,
    filter: ReportFilter = Query(ReportFilter.PENDING, description="Status filter"),
    service: ModerationService = Depends(get_moderation_service),
) -> ReportListResponse:
    """Reports matching the status filter, newest first."""
    views = await service.list_reports(filter)
    return ReportListResponse(data=[_report(view) for view in views])


@router.post(
    "/reports/{report_id}/resolve",
    response_model=ReportDetailResponse,
    summary="Approve or reject a report",
    responses={
        404: {"description": "Report not found"},
        409: {"description": "Report already resolved with a different decision"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def resolve_report(
    request: Request,
    report_id: UUID,
    body: ReportResolve,
    admin: AdminUser,
    service: ModerationService = Depends(get_moderation_service),
) -> ReportDetailResponse:
    report = await service.resolve_report(report_id, body.decision)
    return ReportDetailResponse(data=ReportResponse.model_validate(report))


@router.get(
    "/matches",
    response_model=MatchOverviewListResponse,
    summary="List all matches",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_matches(
    request: Request,
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
) -> MatchOverviewListResponse:
    """Every match newest first, with both participants and a message count."""
    overviews = await service.list_matches_with_messages()
    return MatchOverviewListResponse(
        data=[
            MatchOverviewResponse(
                id=item.match.id,
                status=item.match.status,
                created_at=item.match.created_at,
                user=_summary(item.user),
                matched_user=_summary(item.matched_user),
                messages_count=item.messages_count,
            )
            for item in overviews
        ]
    )


@router.get(
    "/matches/{match_id}/messages",
    response_model=AdminMessageListResponse,
    summary="Read a match's messages",
    responses={404: {"description": "Match not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_match_messages(
    request: Request,
    match_id: UUID,
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
) -> AdminMessageListResponse:
    messages = await service.get_match_messages(match_id)
    return AdminMessageListResponse(
        data=[
            AdminMessageResponse(
                id=item.message.id,
                sender_id=item.message.sender_id,
                sender_name=item.sender_name,
                sender_avatar_url=item.sender_avatar_url,
                content=item.message.content,
                created_at=item.message.created_at,
            )
            for item in messages
        ]
    )


@router.post(
    "/matches/{match_id}/unmatch",
    response_model=AdminMatchDetailResponse,
    summary="Unmatch a pair",
    responses={
        404: {"description": "Match not found"},
        409: {"description": "Match is already unmatched"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def unmatch(
    request: Request,
    match_id: UUID,
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
) -> AdminMatchDetailResponse:
    """Move the match to the terminal unmatched state; chat is disabled."""
    match = await service.unmatch(match_id)
    return AdminMatchDetailResponse(
        data=AdminMatchResponse(
            id=match.id,
            user_id=match.user_id,
            matched_user_id=match.matched_user_id,
            status=match.status,
            updated_at=match.updated_at,
        )
    )


@router.get(
    "/users",
    response_model=ManagedUserListResponse,
    summary="List users",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_users(
    request: Request,
    admin: AdminUser,
    search: str | None = Query(None, max_length=100, description="Name or email"),
    service: AdminService = Depends(get_admin_service),
) -> ManagedUserListResponse:
    users = await service.list_users(search)
    return ManagedUserListResponse(
        data=[
            ManagedUserResponse(
                id=u.id,
                full_name=u.full_name,
                email=u.email,
                created_at=u.created_at,
                last_sign_in_at=u.last_sign_in_at,
                banned=u.banned,
                verified=u.verified,
            )
            for u in users
        ]
    )


@router.post(
    "/users/{user_id}/verify",
    response_model=ProfileDetailResponse,
    summary="Verify a user",
    responses={404: {"description": "Profile not found"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def verify_user(
    request: Request,
    user_id: UUID,
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
) -> ProfileDetailResponse:
    profile = await service.verify_user(user_id)
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.post(
    "/users/{user_id}/ban",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Ban a user",
    responses={404: {"description": "User not found"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def ban_user(
    request: Request,
    user_id: UUID,
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
) -> None:
    """Flag the account as banned in Supabase Auth.

    The flag travels in the token's app_metadata, so access tokens issued
    before the ban stay valid until they expire. Tokens minted after it are
    refused.
    """
    await service.ban_user(user_id)
    return None


@router.delete(
    "/users/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a user",
    responses={404: {"description": "User not found"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_user(
    request: Request,
    user_id: UUID,
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
) -> None:
    """Delete the account and its profile. This cannot be undone."""
    await service.delete_user(user_id)
    return None
