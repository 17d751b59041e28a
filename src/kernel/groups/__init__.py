"""
Groups and regular-group membership.
"""

from src.kernel.groups.group_service import GroupService
from src.kernel.groups.membership_store import GroupMembershipStore

__all__ = [
    "GroupService",
    "GroupMembershipStore",
]
