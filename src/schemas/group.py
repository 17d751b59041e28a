"""
Group, membership and grant schemas.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from src.kernel.models.access_grant import GrantKind


class GroupCreate(BaseModel):
    """Group creation request."""

    name: str = Field(..., min_length=1, max_length=255)
    is_special_access_group: bool = False


class GroupUpdate(BaseModel):
    """Group update request. Omitted fields are left unchanged."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    is_special_access_group: Optional[bool] = None


class GroupResponse(BaseModel):
    """Group response."""

    id: int
    name: str
    is_special_access_group: bool

    class Config:
        from_attributes = True


class MemberAddRequest(BaseModel):
    """Add a user to a regular group."""

    username: str = Field(..., min_length=1, max_length=255)


class GroupMembersResponse(BaseModel):
    """Members of a group, sorted by username."""

    group_id: int
    members: List[str]


class GrantRequest(BaseModel):
    """Grant a right on a special-access group."""

    username: str = Field(..., min_length=1, max_length=255)
    kind: GrantKind


class GrantResponse(BaseModel):
    """Result of a grant; `granted` lists every kind inserted."""

    group_id: int
    username: str
    granted: List[GrantKind]


class GranteeResponse(BaseModel):
    """One grantee."""

    username: str
    full_name: Optional[str] = None

    class Config:
        from_attributes = True


class GranteeListResponse(BaseModel):
    """Users holding one grant kind on a group."""

    group_id: int
    kind: GrantKind
    grantees: List[GranteeResponse]
