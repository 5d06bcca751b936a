"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.services.admin_service import AdminService
from domain.services.discovery_service import DiscoveryService
from domain.services.match_service import MatchService
from domain.services.moderation_service import ModerationService
from domain.services.profile_service import ProfileService
from infrastructure.auth.supabase_identity import SupabaseIdentityService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.storage.supabase_storage import SupabaseObjectStorage


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_identity_service() -> SupabaseIdentityService:
    """Get Supabase Auth client instance."""
    return SupabaseIdentityService()


@lru_cache
def get_object_storage() -> SupabaseObjectStorage:
    """Get Supabase Storage client instance."""
    return SupabaseObjectStorage()


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(
        get_uow_factory(),
        storage=get_object_storage(),
        identity=get_identity_service(),
        avatars_bucket=settings.avatars_bucket,
        default_location=settings.default_location,
        minimum_age=settings.minimum_age,
    )


@lru_cache
def get_discovery_service() -> DiscoveryService:
    """Get Discovery service instance."""
    return DiscoveryService(get_uow_factory())


@lru_cache
def get_match_service() -> MatchService:
    """Get Match service instance."""
    return MatchService(get_uow_factory())


@lru_cache
def get_moderation_service() -> ModerationService:
    """Get Moderation service instance."""
    return ModerationService(get_uow_factory())


@lru_cache
def get_admin_service() -> AdminService:
    """Get Admin service instance."""
    return AdminService(get_uow_factory(), identity=get_identity_service())
