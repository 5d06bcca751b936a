"""Report API routes."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_moderation_service
from api.v1.schemas.report import ReportCreate, ReportDetailResponse, ReportResponse
from core.rate_limit import limiter
from domain.services.moderation_service import ModerationService

router = APIRouter(prefix="/reports", tags=["reports"])


@router.post(
    "",
    response_model=ReportDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Report a user",
    responses={
        201: {"description": "Report filed for moderation"},
        404: {"description": "Reported user not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_report(
    request: Request,
    body: ReportCreate,
    user: CurrentUser,
    service: ModerationService = Depends(get_moderation_service),
) -> ReportDetailResponse:
    report = await service.create_report(
        reporter_id=user.id,
        reported_user_id=body.reported_user_id,
        reason=body.reason,
        content_type=body.content_type,
        content=body.content,
    )
    return ReportDetailResponse(data=ReportResponse.model_validate(report))
