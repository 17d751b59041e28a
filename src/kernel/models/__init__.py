"""
Kernel Data Models

SQLAlchemy models for users, groups, grants, articles and help requests.
"""

from src.kernel.models.base import Base, TimestampMixin, join_list, split_list
from src.kernel.models.user import User, UserRole, UserRoleAssignment
from src.kernel.models.group import Group, GroupMember
from src.kernel.models.access_grant import AccessGrant, GrantKind
from src.kernel.models.article import HelpArticle, ArticleGroup
from src.kernel.models.help_request import HelpRequest

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "join_list",
    "split_list",
    # User
    "User",
    "UserRole",
    "UserRoleAssignment",
    # Groups
    "Group",
    "GroupMember",
    # Grants
    "AccessGrant",
    "GrantKind",
    # Articles
    "HelpArticle",
    "ArticleGroup",
    # Help requests
    "HelpRequest",
]
