"""
Grant store for special-access groups.

Four independent grant kinds exist per (group, user). Granting
InstructorAdmin carries the bootstrap rule: the first instructor to become
InstructorAdmin of a group is also made InstructorViewer of it.
"""

from typing import List, Optional, Set

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.kernel.errors import InvalidOperationError, NotFoundError
from src.kernel.identity.user_directory import UserDirectory
from src.kernel.models.access_grant import AccessGrant, GrantKind
from src.kernel.models.group import Group
from src.kernel.models.user import User, UserRole
from src.kernel.storage import SessionStore
from src.logging_config import get_logger

logger = get_logger(__name__)


class AccessGrantStore(SessionStore):
    """
    Store for (group, username, kind) grant rows.

    Duplicate grants are stored as separate rows. Username existence is
    only checked on the InstructorAdmin path, where the bootstrap rule
    needs the user's roles.
    """

    def __init__(self, session: AsyncSession, users: Optional[UserDirectory] = None):
        super().__init__(session)
        self.users = users or UserDirectory(session)

    async def grant(self, group_id: int, username: str, kind: GrantKind) -> List[GrantKind]:
        """
        Grant a right on a special-access group.

        Args:
            group_id: Target group, must be a special-access group
            username: Grantee
            kind: Grant kind

        Returns:
            The kinds actually inserted, in insertion order

        Raises:
            NotFoundError: If the group does not exist
            InvalidOperationError: If the group is not special-access, or an
                InstructorAdmin grant names an unknown user
        """
        kind = GrantKind(kind)
        await self._require_special_group(group_id)

        inserted = [kind]
        if kind == GrantKind.INSTRUCTOR_ADMIN:
            if not await self.users.exists(username):
                raise InvalidOperationError(f"Unknown user: {username}")
            if await self.is_first_instructor_admin(group_id, username):
                inserted.append(GrantKind.INSTRUCTOR_VIEWER)

        # Both bootstrap rows go out in one flush inside the caller's
        # transaction; readers never see InstructorAdmin without the viewer.
        self.session.add_all(
            [AccessGrant(group_id=group_id, username=username, kind=k) for k in inserted]
        )
        await self._flush()

        if len(inserted) > 1:
            logger.info(
                "First instructor admin promoted to instructor viewer",
                extra={"group_id": group_id, "grantee": username},
            )
        logger.info(
            "Grant added",
            extra={"group_id": group_id, "grantee": username, "grant_kind": kind.value},
        )
        return inserted

    async def revoke(self, group_id: int, username: str, kind: GrantKind) -> int:
        """Remove every row for (group, username, kind). Returns rows removed."""
        kind = GrantKind(kind)
        result = await self._execute(
            delete(AccessGrant).where(
                AccessGrant.group_id == group_id,
                AccessGrant.username == username,
                AccessGrant.kind == kind.value,
            )
        )
        logger.info(
            "Grant revoked",
            extra={
                "group_id": group_id,
                "grantee": username,
                "grant_kind": kind.value,
                "rows": result.rowcount,
            },
        )
        return result.rowcount

    async def list_grantees(self, group_id: int, kind: GrantKind) -> Set[User]:
        """Users holding `kind` on the group. Grants to unknown usernames are not listed."""
        kind = GrantKind(kind)
        result = await self._execute(
            select(User)
            .join(AccessGrant, AccessGrant.username == User.username)
            .where(
                AccessGrant.group_id == group_id,
                AccessGrant.kind == kind.value,
            )
        )
        return set(result.scalars().all())

    async def has_any_grant(self, group_id: int, username: str) -> bool:
        """True if the user holds at least one grant of any kind on the group."""
        result = await self._execute(
            select(AccessGrant.id)
            .where(
                AccessGrant.group_id == group_id,
                AccessGrant.username == username,
            )
            .limit(1)
        )
        return result.first() is not None

    async def kinds_for(self, group_id: int, username: str) -> Set[GrantKind]:
        result = await self._execute(
            select(AccessGrant.kind).where(
                AccessGrant.group_id == group_id,
                AccessGrant.username == username,
            )
        )
        return {GrantKind(k) for k in result.scalars().all()}

    async def count_grants(self, group_id: int, username: str, kind: GrantKind) -> int:
        """Number of stored rows for (group, username, kind), duplicates included."""
        result = await self._execute(
            select(AccessGrant.id).where(
                AccessGrant.group_id == group_id,
                AccessGrant.username == username,
                AccessGrant.kind == GrantKind(kind).value,
            )
        )
        return len(result.all())

    async def is_first_instructor_admin(self, group_id: int, username: str) -> bool:
        """
        Bootstrap check, evaluated at grant time only.

        The group has no InstructorAdmin grantees yet, the user exists, and
        the user holds the Instructor role.
        """
        if await self.list_grantees(group_id, GrantKind.INSTRUCTOR_ADMIN):
            return False
        if not await self.users.exists(username):
            return False
        return UserRole.INSTRUCTOR in await self.users.roles_of(username)

    async def clear_for_group(self, group_id: int) -> None:
        await self._execute(delete(AccessGrant).where(AccessGrant.group_id == group_id))

    async def _require_special_group(self, group_id: int) -> Group:
        group = await self._get(Group, group_id)
        if group is None:
            raise NotFoundError(f"Group not found: {group_id}")
        if not group.is_special_access_group:
            logger.warning(
                "Rejected grant on regular group",
                extra={"group_id": group_id},
            )
            raise InvalidOperationError(
                f"Group {group.name!r} is not a special access group"
            )
        return group
