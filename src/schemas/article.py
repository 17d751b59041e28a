"""
Help article schemas.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from src.kernel.models.article import HelpArticle


class ArticleCreate(BaseModel):
    """Article creation request."""

    header: Optional[str] = Field(None, max_length=255)
    title: str = Field(..., min_length=1, max_length=255)
    short_description: Optional[str] = Field(None, max_length=500)
    keywords: List[str] = []
    body: Optional[str] = None
    reference_links: List[str] = []


class ArticleUpdate(BaseModel):
    """Article update request. Omitted fields are left unchanged."""

    header: Optional[str] = Field(None, max_length=255)
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    short_description: Optional[str] = Field(None, max_length=500)
    keywords: Optional[List[str]] = None
    body: Optional[str] = None
    reference_links: Optional[List[str]] = None


class ArticleResponse(BaseModel):
    """Full article."""

    id: int
    header: Optional[str]
    title: str
    short_description: Optional[str]
    keywords: List[str]
    body: Optional[str]
    reference_links: List[str]

    @classmethod
    def from_article(cls, article: HelpArticle) -> "ArticleResponse":
        return cls(
            id=article.id,
            header=article.header,
            title=article.title,
            short_description=article.short_description,
            keywords=article.keyword_list,
            body=article.body,
            reference_links=article.reference_link_list,
        )


class ArticleSummary(BaseModel):
    """Article as shown in listings and search results."""

    id: int
    title: str
    short_description: Optional[str]

    class Config:
        from_attributes = True


class ArticleGroupsResponse(BaseModel):
    """Groups an article is associated with."""

    article_id: int
    group_ids: List[int]
