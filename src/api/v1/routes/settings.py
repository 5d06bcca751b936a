"""Settings API routes."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_profile_service
from api.v1.schemas.settings import SettingsDetailResponse, SettingsResponse, SettingsUpdate
from core.rate_limit import limiter
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get(
    "",
    response_model=SettingsDetailResponse,
    summary="Get settings",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_settings(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> SettingsDetailResponse:
    user_settings = await service.get_settings(user.id)
    return SettingsDetailResponse(data=SettingsResponse.from_entity(user_settings))


@router.patch(
    "",
    response_model=SettingsDetailResponse,
    summary="Update settings",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_settings(
    request: Request,
    body: SettingsUpdate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> SettingsDetailResponse:
    """Apply the sent settings; omitted ones keep their value."""
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    user_settings = await service.update_settings(user.id, changes)
    return SettingsDetailResponse(data=SettingsResponse.from_entity(user_settings))


@router.delete(
    "/account",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete account",
    responses={204: {"description": "Profile and account deleted"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_account(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> None:
    """Permanently delete the profile and the sign-in account."""
    await service.delete_account(user.id)
    return None
