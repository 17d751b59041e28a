"""
Pydantic schemas for API request/response validation.
"""

from src.schemas.article import (
    ArticleCreate,
    ArticleUpdate,
    ArticleResponse,
    ArticleSummary,
    ArticleGroupsResponse,
)
from src.schemas.group import (
    GroupCreate,
    GroupUpdate,
    GroupResponse,
    MemberAddRequest,
    GroupMembersResponse,
    GrantRequest,
    GrantResponse,
    GranteeResponse,
    GranteeListResponse,
)
from src.schemas.search import (
    SearchResponse,
    HelpRequestCreate,
    HelpRequestResponse,
)
from src.schemas.common import (
    ErrorResponse,
    SuccessResponse,
    HealthResponse,
)

__all__ = [
    # Article
    "ArticleCreate",
    "ArticleUpdate",
    "ArticleResponse",
    "ArticleSummary",
    "ArticleGroupsResponse",
    # Group
    "GroupCreate",
    "GroupUpdate",
    "GroupResponse",
    "MemberAddRequest",
    "GroupMembersResponse",
    "GrantRequest",
    "GrantResponse",
    "GranteeResponse",
    "GranteeListResponse",
    # Search
    "SearchResponse",
    "HelpRequestCreate",
    "HelpRequestResponse",
    # Common
    "ErrorResponse",
    "SuccessResponse",
    "HealthResponse",
]
