"""
User directory: identity and role lookups by username.
"""

from typing import Iterable, Optional, Set

from sqlalchemy import func, select

from src.kernel.errors import InvalidOperationError
from src.kernel.models.user import User, UserRole, UserRoleAssignment
from src.kernel.storage import SessionStore
from src.logging_config import get_logger

logger = get_logger(__name__)


class UserDirectory(SessionStore):
    """
    Read access to users and their system-wide roles.

    Registration exists for seeding and tests; account lifecycle proper
    (passwords, invitations, resets) belongs to the login service.
    """

    async def get_user(self, username: str) -> Optional[User]:
        """Return the user with this username, or None."""
        result = await self._execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def exists(self, username: str) -> bool:
        result = await self._execute(
            select(func.count()).select_from(User).where(User.username == username)
        )
        return (result.scalar() or 0) > 0

    async def roles_of(self, username: str) -> Set[UserRole]:
        """Roles held by the user; empty for unknown usernames."""
        result = await self._execute(
            select(UserRoleAssignment.role)
            .join(User, UserRoleAssignment.user_id == User.id)
            .where(User.username == username)
        )
        return {UserRole(role) for role in result.scalars().all()}

    async def register_user(
        self,
        username: str,
        roles: Iterable[UserRole],
        email: Optional[str] = None,
        full_name: Optional[str] = None,
    ) -> User:
        """
        Create a user with the given roles.

        Raises:
            InvalidOperationError: If the username is taken
        """
        username = username.strip()
        if await self.exists(username):
            raise InvalidOperationError(f"Username already registered: {username}")

        user = User(
            username=username,
            email=email.lower().strip() if email else None,
            full_name=full_name.strip() if full_name else None,
            role_assignments=[UserRoleAssignment(role=UserRole(r)) for r in set(roles)],
        )
        self.session.add(user)
        await self._flush()

        logger.info(
            "User registered",
            extra={"user": username, "roles": sorted(r.value for r in user.roles)},
        )
        return user
