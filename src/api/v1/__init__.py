"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.admin import router as admin_router
from api.v1.routes.discovery import router as discovery_router
from api.v1.routes.matches import router as matches_router
from api.v1.routes.onboarding import router as onboarding_router
from api.v1.routes.profile import router as profile_router
from api.v1.routes.reports import router as reports_router
from api.v1.routes.settings import router as settings_router

router = APIRouter()
router.include_router(profile_router)
router.include_router(onboarding_router)
router.include_router(settings_router)
router.include_router(discovery_router)
router.include_router(matches_router)
router.include_router(reports_router)
router.include_router(admin_router)
