"""OAuth callback and sign-out endpoints."""

import structlog
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse, Response
from sqlalchemy.exc import SQLAlchemyError

from api.dependencies.auth import AccessToken
from api.v1.dependencies import get_identity_service, get_profile_service
from core.config import settings
from core.exceptions import AppException, ProfileNotFoundError
from core.rate_limit import limiter
from domain.services.profile_service import ProfileService
from infrastructure.auth.supabase_identity import SupabaseIdentityService

logger = structlog.get_logger()

router = APIRouter(prefix="/auth", tags=["auth"])

ACCESS_TOKEN_COOKIE = "sb-access-token"
REFRESH_TOKEN_COOKIE = "sb-refresh-token"


def _redirect(path: str) -> RedirectResponse:
    return RedirectResponse(url=path)


def _set_session_cookie(response: Response, name: str, value: str) -> None:
    response.set_cookie(
        name,
        value,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


@router.get(
    "/callback",
    response_class=RedirectResponse,
    summary="OAuth redirect target",
    responses={307: {"description": "Redirect to sign-in, onboarding or dashboard"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def auth_callback(
    request: Request,
    code: str | None = None,
    code_verifier: str | None = None,
    identity: SupabaseIdentityService = Depends(get_identity_service),
    profiles: ProfileService = Depends(get_profile_service),
) -> RedirectResponse:
    """
    Exchange the one-time code for a session and route the new user.

    Users without a profile, or whose profile has no name yet, are sent to
    onboarding; everyone else lands on the dashboard.
    """
    if not code:
        logger.warning("auth_callback_missing_code")
        return _redirect(f"{settings.signin_path}?error=no_code")

    try:
        session = await identity.exchange_code_for_session(code, code_verifier)
    except AppException as e:
        logger.warning("auth_code_exchange_failed", error_code=e.error_code.value)
        return _redirect(f"{settings.signin_path}?error=auth_error")

    try:
        profile = await profiles.get_profile(session.user_id)
        target = settings.dashboard_path if profile.is_onboarded else settings.onboarding_path
    except ProfileNotFoundError:
        target = settings.onboarding_path
    except SQLAlchemyError:
        logger.error("auth_callback_profile_lookup_failed", exc_info=True)
        return _redirect(f"{settings.signin_path}?error=profile_error")

    response = _redirect(target)
    _set_session_cookie(response, ACCESS_TOKEN_COOKIE, session.access_token)
    if session.refresh_token:
        _set_session_cookie(response, REFRESH_TOKEN_COOKIE, session.refresh_token)
    logger.info("auth_callback_completed", user_id=str(session.user_id), redirect=target)
    return response


@router.post(
    "/signout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Sign out",
    responses={204: {"description": "Session revoked"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def sign_out(
    request: Request,
    token: AccessToken,
    identity: SupabaseIdentityService = Depends(get_identity_service),
) -> Response:
    """Revoke the session behind the bearer token and clear session cookies."""
    await identity.sign_out(token)
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(ACCESS_TOKEN_COOKIE)
    response.delete_cookie(REFRESH_TOKEN_COOKIE)
    return response
