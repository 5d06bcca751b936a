"""Onboarding API routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_profile_service
from api.v1.schemas.onboarding import (
    OnboardingRequest,
    OnboardingResponse,
    OnboardingResult,
    StepValidationResponse,
    StepValidationResult,
)
from api.v1.schemas.profile import ProfileResponse
from core.config import settings
from core.rate_limit import limiter
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/onboarding", tags=["onboarding"])


@router.post(
    "",
    response_model=OnboardingResponse,
    summary="Complete onboarding",
    responses={
        200: {"description": "Profile saved, client should go to the dashboard"},
        400: {"description": "A step failed validation"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def complete_onboarding(
    request: Request,
    body: OnboardingRequest,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> OnboardingResponse:
    """Validate all five steps and save the answers to the profile."""
    profile = await service.complete_onboarding(user.id, body.to_data())
    return OnboardingResponse(
        data=OnboardingResult(
            profile=ProfileResponse.from_entity(profile),
            redirect_to=settings.dashboard_path,
        )
    )


@router.post(
    "/steps/{step}",
    response_model=StepValidationResponse,
    summary="Validate one onboarding step",
    responses={400: {"description": "The step failed validation"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def validate_step(
    request: Request,
    step: int,
    body: OnboardingRequest,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> StepValidationResponse:
    """Check a single step before the client moves on. Nothing is saved."""
    service.validate_onboarding_step(step, body.to_data())
    return StepValidationResponse(data=StepValidationResult(step=step))
