"""
Membership of users in regular (non-special) groups.
"""

from typing import Set

from sqlalchemy import delete, select

from src.kernel.models.group import GroupMember
from src.kernel.storage import SessionStore
from src.logging_config import get_logger

logger = get_logger(__name__)


class GroupMembershipStore(SessionStore):
    """Plain, ungated (group, username) membership rows."""

    async def add_member(self, group_id: int, username: str) -> None:
        """Add a member; adding an existing member is a no-op."""
        if await self.is_member(group_id, username):
            return
        self.session.add(GroupMember(group_id=group_id, username=username))
        await self._flush()
        logger.info("Member added", extra={"group_id": group_id, "member": username})

    async def remove_member(self, group_id: int, username: str) -> None:
        await self._execute(
            delete(GroupMember).where(
                GroupMember.group_id == group_id,
                GroupMember.username == username,
            )
        )
        logger.info("Member removed", extra={"group_id": group_id, "member": username})

    async def list_members(self, group_id: int) -> Set[str]:
        result = await self._execute(
            select(GroupMember.username).where(GroupMember.group_id == group_id)
        )
        return set(result.scalars().all())

    async def is_member(self, group_id: int, username: str) -> bool:
        result = await self._execute(
            select(GroupMember.username).where(
                GroupMember.group_id == group_id,
                GroupMember.username == username,
            )
        )
        return result.first() is not None

    async def clear_for_group(self, group_id: int) -> None:
        await self._execute(delete(GroupMember).where(GroupMember.group_id == group_id))
