"""
Group CRUD and the delete cascade.
"""

from typing import List, Optional

from sqlalchemy import select

from src.kernel.articles.association_store import ArticleAssociationStore
from src.kernel.errors import InvalidOperationError, NotFoundError
from src.kernel.groups.membership_store import GroupMembershipStore
from src.kernel.models.group import Group
from src.kernel.permissions.access_grant_store import AccessGrantStore
from src.kernel.storage import SessionStore
from src.logging_config import get_logger

logger = get_logger(__name__)


class GroupService(SessionStore):
    """
    Service for group lifecycle operations.

    Deleting a group removes its memberships, grants and article
    associations in the same transaction; articles that were only linked
    to the deleted group become globally visible.
    """

    async def create_group(self, name: str, is_special_access_group: bool = False) -> Group:
        """
        Create a group.

        Raises:
            InvalidOperationError: If the name is empty or already taken
        """
        name = (name or "").strip()
        if not name:
            raise InvalidOperationError("Group name is required")
        if await self.get_group_by_name(name) is not None:
            raise InvalidOperationError(f"Group name already exists: {name}")

        group = Group(name=name, is_special_access_group=is_special_access_group)
        self.session.add(group)
        await self._flush()

        logger.info(
            "Group created",
            extra={"group_id": group.id, "special": is_special_access_group},
        )
        return group

    async def get_group(self, group_id: int) -> Optional[Group]:
        return await self._get(Group, group_id)

    async def require_group(self, group_id: int) -> Group:
        group = await self.get_group(group_id)
        if group is None:
            raise NotFoundError(f"Group not found: {group_id}")
        return group

    async def get_group_by_name(self, name: str) -> Optional[Group]:
        result = await self._execute(select(Group).where(Group.name == name))
        return result.scalar_one_or_none()

    async def list_groups(self) -> List[Group]:
        result = await self._execute(select(Group).order_by(Group.id))
        return list(result.scalars().all())

    async def update_group(
        self,
        group_id: int,
        name: Optional[str] = None,
        is_special_access_group: Optional[bool] = None,
    ) -> Group:
        """
        Rename a group or change its special-access flag.

        The flag is frozen once any article references the group.

        Raises:
            NotFoundError: If the group does not exist
            InvalidOperationError: On a duplicate name, or a flag change
                while articles are associated
        """
        group = await self.require_group(group_id)

        if name is not None:
            name = name.strip()
            if not name:
                raise InvalidOperationError("Group name is required")
            existing = await self.get_group_by_name(name)
            if existing is not None and existing.id != group_id:
                raise InvalidOperationError(f"Group name already exists: {name}")
            group.name = name

        if (
            is_special_access_group is not None
            and is_special_access_group != group.is_special_access_group
        ):
            if await ArticleAssociationStore(self.session).articles_of(group_id):
                raise InvalidOperationError(
                    "Special access flag cannot change while articles reference the group"
                )
            group.is_special_access_group = is_special_access_group

        await self._flush()
        logger.info("Group updated", extra={"group_id": group_id})
        return group

    async def delete_group(self, group_id: int) -> None:
        """Delete a group together with its memberships, grants and associations."""
        group = await self.require_group(group_id)

        await GroupMembershipStore(self.session).clear_for_group(group_id)
        await AccessGrantStore(self.session).clear_for_group(group_id)
        await ArticleAssociationStore(self.session).clear_for_group(group_id)
        await self.session.delete(group)
        await self._flush()

        logger.info("Group deleted with cascade", extra={"group_id": group_id})
