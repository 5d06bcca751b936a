"""Profile API routes."""

from fastapi import APIRouter, Depends, File, Request, UploadFile

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_profile_service
from api.v1.schemas.profile import (
    LikedProfileListResponse,
    LikedProfileResponse,
    ProfileDetailResponse,
    ProfileResponse,
    ProfileUpdate,
)
from core.rate_limit import limiter
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get(
    "",
    response_model=ProfileDetailResponse,
    summary="Get own profile",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get the authenticated user's profile, creating a default one on first access."""
    profile = await service.get_or_create_profile(user.id, full_name=user.display_name)
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.patch(
    "",
    response_model=ProfileDetailResponse,
    summary="Update own profile",
    responses={
        200: {"description": "Profile updated successfully"},
        400: {"description": "Invalid field value or underage birthdate"},
        404: {"description": "Profile not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_profile(
    request: Request,
    body: ProfileUpdate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Merge the sent fields into the profile."""
    profile = await service.update_profile(user.id, body.model_dump(exclude_unset=True))
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.post(
    "/avatar",
    response_model=ProfileDetailResponse,
    summary="Upload profile picture",
    responses={
        200: {"description": "Avatar uploaded and linked"},
        400: {"description": "File is empty or not an image"},
        502: {"description": "Storage service failure"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def upload_avatar(
    request: Request,
    user: CurrentUser,
    file: UploadFile = File(...),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Upload an image; it replaces any previous avatar."""
    data = await file.read()
    profile = await service.upload_avatar(
        user.id,
        filename=file.filename or "",
        data=data,
        content_type=file.content_type or "",
    )
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.get(
    "/liked",
    response_model=LikedProfileListResponse,
    summary="List liked profiles",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_liked_profiles(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> LikedProfileListResponse:
    """Profiles the user has liked, most recent first."""
    liked = await service.get_liked_profiles(user.id)
    return LikedProfileListResponse(
        data=[
            LikedProfileResponse(
                profile=ProfileResponse.from_entity(item.profile),
                liked_at=item.liked_at,
            )
            for item in liked
        ]
    )
