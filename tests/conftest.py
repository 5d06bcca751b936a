"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Awaitable, Callable
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Any
from uuid import UUID, uuid4

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.exceptions import AuthenticationError, ErrorCode, UserNotFoundError
from domain.entities.identity import AuthSession, AuthUser
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base, ProfileModel


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory, shared through a single connection)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed user IDs for consistency
TEST_USER_ID = uuid4()
OTHER_USER_ID = uuid4()
ADMIN_USER_ID = uuid4()


class FakeIdentityService:
    """In-memory stand-in for the Supabase Auth client."""

    def __init__(self) -> None:
        self.users: dict[UUID, AuthUser] = {}
        self.sessions: dict[str, AuthSession] = {}
        self.signed_out: list[str] = []

    def add_user(self, user_id: UUID, email: str) -> None:
        self.users[user_id] = AuthUser(id=user_id, email=email)

    async def exchange_code_for_session(
        self, code: str, code_verifier: str | None = None
    ) -> AuthSession:
        session = self.sessions.get(code)
        if session is None:
            raise AuthenticationError("Invalid auth code", error_code=ErrorCode.INVALID_TOKEN)
        return session

    async def sign_out(self, access_token: str) -> None:
        self.signed_out.append(access_token)

    async def list_users(self) -> list[AuthUser]:
        return list(self.users.values())

    async def set_banned(self, user_id: UUID, banned: bool) -> AuthUser:
        if user_id not in self.users:
            raise UserNotFoundError(str(user_id))
        self.users[user_id] = replace(self.users[user_id], banned=banned)
        return self.users[user_id]

    async def delete_user(self, user_id: UUID) -> None:
        if self.users.pop(user_id, None) is None:
            raise UserNotFoundError(str(user_id))


class FakeObjectStorage:
    """In-memory stand-in for Supabase Storage."""

    def __init__(self) -> None:
        self.objects: dict[str, tuple[bytes, str]] = {}

    async def upload(
        self,
        bucket: str,
        key: str,
        data: bytes,
        content_type: str = "application/octet-stream",
        upsert: bool = True,
    ) -> str:
        self.objects[f"{bucket}/{key}"] = (data, content_type)
        return f"{bucket}/{key}"

    def get_public_url(self, bucket: str, key: str) -> str:
        return f"https://storage.test/{bucket}/{key}"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for direct seeding and assertions."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def seed_profile(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[..., Awaitable[UUID]]:
    """Insert an onboarded profile row and return its id."""

    async def _seed(
        user_id: UUID | None = None,
        full_name: str = "Test User",
        interests: list[str] | None = None,
        languages: list[str] | None = None,
        settings: dict[str, Any] | None = None,
    ) -> UUID:
        profile_id = user_id or uuid4()
        async with session_factory() as session:
            session.add(
                ProfileModel(
                    id=profile_id,
                    full_name=full_name,
                    birthdate=date(1995, 6, 15),
                    gender="female",
                    bio="",
                    interests=interests if interests is not None else ["Music"],
                    languages=languages if languages is not None else ["English"],
                    settings=settings or {},
                )
            )
            await session.commit()
        return profile_id

    return _seed


@pytest.fixture
def test_user() -> TokenUser:
    """Create a test user with fixed ID."""
    return TokenUser(
        id=TEST_USER_ID,
        email="test@example.com",
        display_name="Test User",
    )


@pytest.fixture
def other_user() -> TokenUser:
    return TokenUser(id=OTHER_USER_ID, email="other@example.com", display_name="Other User")


@pytest.fixture
def admin_user() -> TokenUser:
    return TokenUser(
        id=ADMIN_USER_ID,
        email="admin@example.com",
        display_name="Admin",
        app_role="admin",
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def auth_token(auth_provider: JWTAuthProvider, test_user: TokenUser) -> str:
    """Create auth token for test user."""
    return str(auth_provider.create_token(test_user))


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def identity() -> FakeIdentityService:
    fake = FakeIdentityService()
    fake.add_user(TEST_USER_ID, "test@example.com")
    fake.add_user(OTHER_USER_ID, "other@example.com")
    return fake


@pytest.fixture
def storage() -> FakeObjectStorage:
    return FakeObjectStorage()


@pytest.fixture
def make_app(
    session_factory: async_sessionmaker[AsyncSession],
    auth_provider: JWTAuthProvider,
    identity: FakeIdentityService,
    storage: FakeObjectStorage,
) -> Callable[[TokenUser | None], FastAPI]:
    """
    Build an app wired to the test database and fake Supabase clients.

    When a user is given, the auth dependency returns it directly.
    """
    from api.dependencies.auth import get_auth_provider, get_current_user
    from api.v1.dependencies import (
        get_admin_service,
        get_discovery_service,
        get_identity_service,
        get_match_service,
        get_moderation_service,
        get_object_storage,
        get_profile_service,
    )
    from domain.services.admin_service import AdminService
    from domain.services.discovery_service import DiscoveryService
    from domain.services.match_service import MatchService
    from domain.services.moderation_service import ModerationService
    from domain.services.profile_service import ProfileService
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from main import create_app

    # Create a UoW factory that uses the test database
    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    def _build(user: TokenUser | None = None) -> FastAPI:
        app = create_app()

        if user is not None:

            async def override_get_user() -> TokenUser:
                return user

            app.dependency_overrides[get_current_user] = override_get_user

        app.dependency_overrides[get_auth_provider] = lambda: auth_provider
        app.dependency_overrides[get_identity_service] = lambda: identity
        app.dependency_overrides[get_object_storage] = lambda: storage
        app.dependency_overrides[get_profile_service] = lambda: ProfileService(
            test_uow_factory, storage=storage, identity=identity
        )
        app.dependency_overrides[get_discovery_service] = lambda: DiscoveryService(
            test_uow_factory
        )
        app.dependency_overrides[get_match_service] = lambda: MatchService(test_uow_factory)
        app.dependency_overrides[get_moderation_service] = lambda: ModerationService(
            test_uow_factory
        )
        app.dependency_overrides[get_admin_service] = lambda: AdminService(
            test_uow_factory, identity=identity
        )
        return app

    return _build


async def _client_for(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def client(
    make_app: Callable[[TokenUser | None], FastAPI],
) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth override)."""
    async for c in _client_for(make_app(None)):
        yield c


@pytest.fixture
async def authenticated_client(
    make_app: Callable[[TokenUser | None], FastAPI],
    test_user: TokenUser,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create authenticated test client with proper database and auth overrides.

    This client:
    - Uses an in-memory SQLite database
    - Overrides auth dependency to return the test user
    - Overrides service factories to use the test database and fake Supabase clients
    """
    async for c in _client_for(make_app(test_user)):
        yield c


@pytest.fixture
async def other_client(
    make_app: Callable[[TokenUser | None], FastAPI],
    other_user: TokenUser,
) -> AsyncGenerator[AsyncClient, None]:
    """Second signed-in user sharing the same database."""
    async for c in _client_for(make_app(other_user)):
        yield c


@pytest.fixture
async def admin_client(
    make_app: Callable[[TokenUser | None], FastAPI],
    admin_user: TokenUser,
) -> AsyncGenerator[AsyncClient, None]:
    """Client authenticated as an administrator."""
    async for c in _client_for(make_app(admin_user)):
        yield c
