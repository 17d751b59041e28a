"""
Group endpoints - groups, regular-group membership and special-access grants.
"""

from typing import List

from fastapi import APIRouter, HTTPException, status

from src.api.deps import (
    CurrentUser,
    StaffUser,
    Grants,
    Groups,
    Memberships,
    Associations,
    Visibility,
)
from src.kernel.models.access_grant import GrantKind
from src.schemas.article import ArticleSummary
from src.schemas.common import SuccessResponse
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

router = APIRouter()


# Group CRUD

@router.post("", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
async def create_group(data: GroupCreate, user: StaffUser, groups: Groups):
    """Create a group."""
    group = await groups.create_group(data.name, data.is_special_access_group)
    return GroupResponse.model_validate(group)


@router.get("", response_model=List[GroupResponse])
async def list_groups(user: CurrentUser, groups: Groups):
    """List all groups."""
    return [GroupResponse.model_validate(g) for g in await groups.list_groups()]


@router.get("/{group_id}", response_model=GroupResponse)
async def get_group(group_id: int, user: CurrentUser, groups: Groups):
    """Get a group."""
    return GroupResponse.model_validate(await groups.require_group(group_id))


@router.patch("/{group_id}", response_model=GroupResponse)
async def update_group(group_id: int, data: GroupUpdate, user: StaffUser, groups: Groups):
    """Rename a group or change its special-access flag."""
    group = await groups.update_group(
        group_id,
        name=data.name,
        is_special_access_group=data.is_special_access_group,
    )
    return GroupResponse.model_validate(group)


@router.delete("/{group_id}", response_model=SuccessResponse)
async def delete_group(group_id: int, user: StaffUser, groups: Groups):
    """Delete a group with its memberships, grants and article associations."""
    await groups.delete_group(group_id)
    return SuccessResponse(message="Group deleted")


@router.get("/{group_id}/articles", response_model=List[ArticleSummary])
async def list_group_articles(
    group_id: int,
    user: CurrentUser,
    groups: Groups,
    associations: Associations,
    visibility: Visibility,
):
    """List a group's articles, if the user qualifies for the group."""
    group = await groups.require_group(group_id)
    if not await visibility.can_view_group(user, group):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have access to this group's articles",
        )
    articles = await associations.articles_of(group_id)
    return [ArticleSummary.model_validate(a) for a in articles]


# Regular-group membership

@router.get("/{group_id}/members", response_model=GroupMembersResponse)
async def list_members(
    group_id: int,
    user: StaffUser,
    groups: Groups,
    memberships: Memberships,
):
    """List members of a group."""
    await groups.require_group(group_id)
    members = await memberships.list_members(group_id)
    return GroupMembersResponse(group_id=group_id, members=sorted(members))


@router.post("/{group_id}/members", response_model=SuccessResponse, status_code=status.HTTP_201_CREATED)
async def add_member(
    group_id: int,
    data: MemberAddRequest,
    user: StaffUser,
    groups: Groups,
    memberships: Memberships,
):
    """Add a user to a group."""
    await groups.require_group(group_id)
    await memberships.add_member(group_id, data.username)
    return SuccessResponse(message="Member added", data={"username": data.username})


@router.delete("/{group_id}/members/{username}", response_model=SuccessResponse)
async def remove_member(
    group_id: int,
    username: str,
    user: StaffUser,
    groups: Groups,
    memberships: Memberships,
):
    """Remove a user from a group."""
    await groups.require_group(group_id)
    await memberships.remove_member(group_id, username)
    return SuccessResponse(message="Member removed", data={"username": username})


# Special-access grants

@router.post("/{group_id}/grants", response_model=GrantResponse, status_code=status.HTTP_201_CREATED)
async def grant_access(
    group_id: int,
    data: GrantRequest,
    user: StaffUser,
    grants: Grants,
):
    """Grant a right on a special-access group."""
    granted = await grants.grant(group_id, data.username, data.kind)
    return GrantResponse(group_id=group_id, username=data.username, granted=granted)


@router.delete("/{group_id}/grants/{kind}/{username}", response_model=SuccessResponse)
async def revoke_access(
    group_id: int,
    kind: GrantKind,
    username: str,
    user: StaffUser,
    grants: Grants,
):
    """Revoke every grant of one kind held by a user on a group."""
    removed = await grants.revoke(group_id, username, kind)
    return SuccessResponse(message="Grant revoked", data={"removed": removed})


@router.get("/{group_id}/grants/{kind}", response_model=GranteeListResponse)
async def list_grantees(
    group_id: int,
    kind: GrantKind,
    user: StaffUser,
    groups: Groups,
    grants: Grants,
):
    """List users holding one grant kind on a group."""
    await groups.require_group(group_id)
    grantees = sorted(await grants.list_grantees(group_id, kind), key=lambda u: u.username)
    return GranteeListResponse(
        group_id=group_id,
        kind=kind,
        grantees=[GranteeResponse.model_validate(u) for u in grantees],
    )
