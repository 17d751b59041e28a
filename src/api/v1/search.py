"""
Search and help request endpoints.
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from src.api.deps import CurrentUser, StaffUser, HelpRequests, Search
from src.config import get_settings
from src.schemas.article import ArticleSummary
from src.schemas.search import HelpRequestCreate, HelpRequestResponse, SearchResponse

router = APIRouter()


@router.get("/search", response_model=SearchResponse)
async def search_articles(
    user: CurrentUser,
    search: Search,
    q: str = Query(..., min_length=1, description="Text to find in title, description or keywords"),
    group: Optional[str] = Query(None, description="Group name, or 'all'"),
):
    """Search articles visible to the current user."""
    group = group or get_settings().search_all_groups_sentinel
    try:
        results = await search.search(user, q, group)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
    return SearchResponse(
        query=q.strip(),
        group=group,
        results=[ArticleSummary.model_validate(a) for a in results],
    )


@router.post("/help-requests", response_model=HelpRequestResponse, status_code=status.HTTP_201_CREATED)
async def create_help_request(data: HelpRequestCreate, user: CurrentUser, help_requests: HelpRequests):
    """Tell instructors what you need and could not find."""
    request = await help_requests.add_request(user.username, data.message)
    return HelpRequestResponse.model_validate(request)


@router.get("/help-requests", response_model=List[HelpRequestResponse])
async def list_help_requests(
    user: StaffUser,
    help_requests: HelpRequests,
    username: Optional[str] = Query(None, description="Only this user's requests"),
):
    """List help requests, oldest first."""
    return [HelpRequestResponse.model_validate(r) for r in await help_requests.list_requests(username)]
