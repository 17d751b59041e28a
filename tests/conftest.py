"""
Pytest fixtures for help article repository tests.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool

from src.database import build_engine, build_session_maker
from src.kernel.articles import ArticleAssociationStore, ArticleService
from src.kernel.groups import GroupMembershipStore, GroupService
from src.kernel.identity.jwt import JWTManager
from src.kernel.identity.user_directory import UserDirectory
from src.kernel.models.base import Base
from src.kernel.models.group import Group
from src.kernel.models.user import User, UserRole
from src.kernel.permissions import AccessGrantStore, VisibilityResolver
from src.kernel.search import HelpRequestStore, SearchEngine


# One shared in-memory connection per test
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Create a test database engine."""
    engine = build_engine(TEST_DATABASE_URL, poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with build_session_maker(db_engine)() as session:
        yield session
        await session.rollback()


# Stores and services sharing the test session

@pytest.fixture
def users(db_session: AsyncSession) -> UserDirectory:
    return UserDirectory(db_session)


@pytest.fixture
def groups(db_session: AsyncSession) -> GroupService:
    return GroupService(db_session)


@pytest.fixture
def memberships(db_session: AsyncSession) -> GroupMembershipStore:
    return GroupMembershipStore(db_session)


@pytest.fixture
def grants(db_session: AsyncSession, users: UserDirectory) -> AccessGrantStore:
    return AccessGrantStore(db_session, users=users)


@pytest.fixture
def articles(db_session: AsyncSession) -> ArticleService:
    return ArticleService(db_session)


@pytest.fixture
def associations(db_session: AsyncSession) -> ArticleAssociationStore:
    return ArticleAssociationStore(db_session)


@pytest.fixture
def resolver(
    db_session: AsyncSession,
    associations: ArticleAssociationStore,
    memberships: GroupMembershipStore,
    grants: AccessGrantStore,
) -> VisibilityResolver:
    return VisibilityResolver(
        db_session,
        associations=associations,
        memberships=memberships,
        grants=grants,
    )


@pytest.fixture
def search_engine(
    db_session: AsyncSession,
    resolver: VisibilityResolver,
    memberships: GroupMembershipStore,
) -> SearchEngine:
    return SearchEngine(
        db_session,
        resolver=resolver,
        memberships=memberships,
        all_groups_sentinel="all",
    )


@pytest.fixture
def help_requests(db_session: AsyncSession) -> HelpRequestStore:
    return HelpRequestStore(db_session)


# Users

@pytest_asyncio.fixture
async def test_student(users: UserDirectory) -> User:
    """Create a student."""
    return await users.register_user("alice", [UserRole.STUDENT], full_name="Alice Student")


@pytest_asyncio.fixture
async def test_other_student(users: UserDirectory) -> User:
    """Create a second student with no grants."""
    return await users.register_user("bob", [UserRole.STUDENT], full_name="Bob Student")


@pytest_asyncio.fixture
async def test_instructor(users: UserDirectory) -> User:
    """Create an instructor."""
    return await users.register_user("ivan", [UserRole.INSTRUCTOR], full_name="Ivan Instructor")


@pytest_asyncio.fixture
async def test_second_instructor(users: UserDirectory) -> User:
    """Create a second instructor."""
    return await users.register_user("ines", [UserRole.INSTRUCTOR], full_name="Ines Instructor")


@pytest_asyncio.fixture
async def test_admin(users: UserDirectory) -> User:
    """Create a system administrator."""
    return await users.register_user("root", [UserRole.ADMIN], full_name="Site Admin")


# Groups

@pytest_asyncio.fixture
async def special_group(groups: GroupService) -> Group:
    """Create a special-access group."""
    return await groups.create_group("AI-Research", is_special_access_group=True)


@pytest_asyncio.fixture
async def regular_group(groups: GroupService) -> Group:
    """Create a regular group."""
    return await groups.create_group("Section-01", is_special_access_group=False)


@pytest.fixture
def jwt_manager() -> JWTManager:
    """Create a JWT manager for tests."""
    return JWTManager(
        secret_key="test-secret-key-for-testing-only",
        algorithm="HS256",
        access_token_expire_minutes=30,
    )
