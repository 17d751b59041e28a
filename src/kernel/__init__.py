"""
Kernel Layer

Stores and decision logic for the help article repository:
- User directory (identity, system roles)
- Groups and regular-group membership
- Special-access grants, including the first-instructor bootstrap rule
- Article/group associations
- Visibility resolution and search

Every store takes the caller's AsyncSession; no module keeps global state.
"""

from src.kernel.models import (
    User,
    UserRole,
    Group,
    GroupMember,
    AccessGrant,
    GrantKind,
    HelpArticle,
    ArticleGroup,
    HelpRequest,
)
from src.kernel.errors import (
    HelpRepositoryError,
    NotFoundError,
    InvalidOperationError,
    StorageError,
)

__all__ = [
    # User & Identity
    "User",
    "UserRole",
    # Groups
    "Group",
    "GroupMember",
    # Grants
    "AccessGrant",
    "GrantKind",
    # Articles
    "HelpArticle",
    "ArticleGroup",
    "HelpRequest",
    # Errors
    "HelpRepositoryError",
    "NotFoundError",
    "InvalidOperationError",
    "StorageError",
]
