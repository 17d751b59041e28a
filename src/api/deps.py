"""
FastAPI dependencies for authentication, role gates, database sessions and
the kernel services.
"""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_db
from src.kernel.articles import ArticleAssociationStore, ArticleService
from src.kernel.groups import GroupMembershipStore, GroupService
from src.kernel.identity.jwt import verify_access_token
from src.kernel.identity.user_directory import UserDirectory
from src.kernel.models.user import User, UserRole
from src.kernel.permissions import AccessGrantStore, VisibilityResolver
from src.kernel.search import HelpRequestStore, SearchEngine
from src.logging_config import username_var


# Security scheme
security = HTTPBearer(auto_error=False)


DbSession = Annotated[AsyncSession, Depends(get_db)]


async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    db: DbSession,
) -> User:
    """Get current authenticated user or raise 401."""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = verify_access_token(credentials.credentials)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await UserDirectory(db).get_user(payload.sub)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is disabled",
        )

    username_var.set(user.username)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


class RoleChecker:
    """
    Dependency requiring the current user to hold one of the given roles.

    Usage:
        @router.post("/groups")
        async def create_group(user: Annotated[User, Depends(RoleChecker(UserRole.ADMIN))]):
            ...
    """

    def __init__(self, *roles: UserRole):
        self.roles = frozenset(roles)

    async def __call__(self, user: CurrentUser) -> User:
        if not self.roles & user.roles:
            allowed = ", ".join(sorted(r.value for r in self.roles))
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient role. Required one of: {allowed}",
            )
        return user


# Convenience role dependencies
StaffUser = Annotated[User, Depends(RoleChecker(UserRole.ADMIN, UserRole.INSTRUCTOR))]
InstructorUser = Annotated[User, Depends(RoleChecker(UserRole.INSTRUCTOR))]


# Kernel services, one set per request session

def get_group_service(db: DbSession) -> GroupService:
    return GroupService(db)


def get_membership_store(db: DbSession) -> GroupMembershipStore:
    return GroupMembershipStore(db)


def get_grant_store(db: DbSession) -> AccessGrantStore:
    return AccessGrantStore(db, users=UserDirectory(db))


def get_article_service(db: DbSession) -> ArticleService:
    return ArticleService(db)


def get_association_store(db: DbSession) -> ArticleAssociationStore:
    return ArticleAssociationStore(db)


def get_visibility_resolver(db: DbSession) -> VisibilityResolver:
    return VisibilityResolver(db)


def get_search_engine(db: DbSession) -> SearchEngine:
    return SearchEngine(db, resolver=VisibilityResolver(db))


def get_help_request_store(db: DbSession) -> HelpRequestStore:
    return HelpRequestStore(db)


Groups = Annotated[GroupService, Depends(get_group_service)]
Memberships = Annotated[GroupMembershipStore, Depends(get_membership_store)]
Grants = Annotated[AccessGrantStore, Depends(get_grant_store)]
Articles = Annotated[ArticleService, Depends(get_article_service)]
Associations = Annotated[ArticleAssociationStore, Depends(get_association_store)]
Visibility = Annotated[VisibilityResolver, Depends(get_visibility_resolver)]
Search = Annotated[SearchEngine, Depends(get_search_engine)]
HelpRequests = Annotated[HelpRequestStore, Depends(get_help_request_store)]
