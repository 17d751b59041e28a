"""
Help article endpoints - CRUD and group associations.
"""

from typing import List

from fastapi import APIRouter, HTTPException, status

from src.api.deps import (
    CurrentUser,
    InstructorUser,
    StaffUser,
    Articles,
    Associations,
    Search,
    Visibility,
)
from src.schemas.article import (
    ArticleCreate,
    ArticleUpdate,
    ArticleResponse,
    ArticleSummary,
    ArticleGroupsResponse,
)
from src.schemas.common import SuccessResponse

router = APIRouter()


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(data: ArticleCreate, user: StaffUser, articles: Articles):
    """Create a help article."""
    article = await articles.create_article(
        title=data.title,
        header=data.header,
        short_description=data.short_description,
        keywords=data.keywords,
        body=data.body,
        reference_links=data.reference_links,
    )
    return ArticleResponse.from_article(article)


@router.get("", response_model=List[ArticleSummary])
async def list_articles(user: CurrentUser, search: Search):
    """List every article visible to the current user."""
    return [ArticleSummary.model_validate(a) for a in await search.list_visible(user)]


@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(
    article_id: int,
    user: CurrentUser,
    articles: Articles,
    visibility: Visibility,
):
    """Get a full article, if visible to the current user."""
    article = await articles.require_article(article_id)
    if not await visibility.can_view(user, article):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to view this article",
        )
    return ArticleResponse.from_article(article)


@router.patch("/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: int,
    data: ArticleUpdate,
    user: InstructorUser,
    articles: Articles,
):
    """Edit an article. Instructors only."""
    article = await articles.update_article(article_id, **data.model_dump(exclude_unset=True))
    return ArticleResponse.from_article(article)


@router.delete("/{article_id}", response_model=SuccessResponse)
async def delete_article(article_id: int, user: StaffUser, articles: Articles):
    """Delete an article and its group associations."""
    await articles.delete_article(article_id)
    return SuccessResponse(message="Article deleted")


# Group associations

@router.get("/{article_id}/groups", response_model=ArticleGroupsResponse)
async def list_article_groups(
    article_id: int,
    user: StaffUser,
    articles: Articles,
    associations: Associations,
):
    """List the groups an article is associated with."""
    await articles.require_article(article_id)
    group_ids = await associations.groups_of(article_id)
    return ArticleGroupsResponse(article_id=article_id, group_ids=sorted(group_ids))


@router.put("/{article_id}/groups/{group_id}", response_model=SuccessResponse)
async def associate_article(
    article_id: int,
    group_id: int,
    user: StaffUser,
    associations: Associations,
):
    """Associate an article with a special-access group."""
    await associations.associate(article_id, group_id)
    return SuccessResponse(message="Article associated with group")


@router.delete("/{article_id}/groups/{group_id}", response_model=SuccessResponse)
async def dissociate_article(
    article_id: int,
    group_id: int,
    user: StaffUser,
    associations: Associations,
):
    """Remove an article's association with a group."""
    await associations.dissociate(article_id, group_id)
    return SuccessResponse(message="Article dissociated from group")
