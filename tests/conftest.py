"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import Any
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from tooldash.core.auth.backend import create_access_token
from tooldash.core.database import Base, get_db
from tooldash.core.permissions import RoleKind
from tooldash.main import create_app

# Import all models to ensure they're registered with Base.metadata
from tooldash.modules.users.models import UserProfile, UserRole
from tests.factories.profile import ProfileSeedFactory, RoleSeedFactory


TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
async def engine():
    """Create an in-memory test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db(engine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a transactional database session for tests.

    Each test runs in its own transaction that is rolled back
    after the test completes.
    """
    session_factory = async_sessionmaker(
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with engine.connect() as conn:
        await conn.begin()

        async with session_factory(bind=conn) as session:
            yield session

        await conn.rollback()


@pytest.fixture
async def app(db: AsyncSession):
    """Create test application instance."""
    application = create_app()

    # Override database dependency
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    application.dependency_overrides[get_db] = override_get_db

    yield application

    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


# ============================================================
# Role and Profile Fixtures
# ============================================================


@pytest.fixture
def make_role(db: AsyncSession) -> Callable[..., Awaitable[UserRole]]:
    """Return a coroutine that persists a role of the given kind."""

    async def _make(kind: RoleKind | str = RoleKind.USER, **overrides: Any) -> UserRole:
        seed = RoleSeedFactory.build()
        role = UserRole(
            name=overrides.pop("name", seed.name),
            type=str(kind),
            description=overrides.pop("description", seed.description),
            **overrides,
        )
        db.add(role)
        await db.flush()
        return role

    return _make


@pytest.fixture
async def roles(make_role) -> dict[RoleKind, UserRole]:
    """One persisted role per role kind."""
    return {kind: await make_role(kind) for kind in RoleKind}


@pytest.fixture
def make_profile(db: AsyncSession) -> Callable[..., Awaitable[UserProfile]]:
    """Return a coroutine that persists a profile attached to ``role``."""

    async def _make(
        role: UserRole | None,
        *,
        is_active: bool = True,
        permissions: dict[str, Any] | None = None,
    ) -> UserProfile:
        seed = ProfileSeedFactory.build()
        profile = UserProfile(
            user_id=uuid4(),
            role_id=role.id if role else None,
            is_active=is_active,
            permissions=permissions,
            **seed.model_dump(),
        )
        db.add(profile)
        await db.flush()
        await db.refresh(profile)
        return profile

    return _make


@pytest.fixture
def auth_headers() -> Callable[[UserProfile], dict[str, str]]:
    """Return a function building bearer headers for a profile's principal."""

    def _headers(profile: UserProfile) -> dict[str, str]:
        token = create_access_token(profile.user_id, email=profile.email)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
async def user_profile(make_profile, roles) -> UserProfile:
    """An active profile with the ``user`` role."""
    return await make_profile(roles[RoleKind.USER])


@pytest.fixture
async def admin_profile(make_profile, roles) -> UserProfile:
    """An active profile with the ``admin`` role."""
    return await make_profile(roles[RoleKind.ADMIN])


@pytest.fixture
async def system_admin_profile(make_profile, roles) -> UserProfile:
    """An active profile with the ``system_admin`` role."""
    return await make_profile(roles[RoleKind.SYSTEM_ADMIN])
