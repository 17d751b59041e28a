"""
Article CRUD.
"""

from typing import List, Optional

from sqlalchemy import select

from src.kernel.articles.association_store import ArticleAssociationStore
from src.kernel.errors import InvalidOperationError, NotFoundError
from src.kernel.models.article import HelpArticle
from src.kernel.models.base import join_list
from src.kernel.storage import SessionStore
from src.logging_config import get_logger

logger = get_logger(__name__)

_EDITABLE_FIELDS = ("header", "title", "short_description", "body")


class ArticleService(SessionStore):
    """
    Create, read, update and delete help articles.

    Who may create or edit is decided by the API layer; this service only
    keeps the rows consistent.
    """

    async def create_article(
        self,
        title: str,
        header: Optional[str] = None,
        short_description: Optional[str] = None,
        keywords: Optional[List[str]] = None,
        body: Optional[str] = None,
        reference_links: Optional[List[str]] = None,
    ) -> HelpArticle:
        """
        Create an article.

        Raises:
            InvalidOperationError: If the title is empty
        """
        if not title or not title.strip():
            raise InvalidOperationError("Article title is required")

        article = HelpArticle(
            header=header,
            title=title.strip(),
            short_description=short_description,
            keywords=join_list(keywords),
            body=body,
            reference_links=join_list(reference_links),
        )
        self.session.add(article)
        await self._flush()

        logger.info("Article created", extra={"article_id": article.id})
        return article

    async def get_article(self, article_id: int) -> Optional[HelpArticle]:
        return await self._get(HelpArticle, article_id)

    async def require_article(self, article_id: int) -> HelpArticle:
        article = await self.get_article(article_id)
        if article is None:
            raise NotFoundError(f"Article not found: {article_id}")
        return article

    async def list_articles(self) -> List[HelpArticle]:
        """All articles in storage order, without any visibility filtering."""
        result = await self._execute(select(HelpArticle).order_by(HelpArticle.id))
        return list(result.scalars().all())

    async def update_article(
        self,
        article_id: int,
        **changes,
    ) -> HelpArticle:
        """
        Apply field changes to an article.

        Accepts header, title, short_description, body, keywords and
        reference_links; None values are ignored.
        """
        article = await self.require_article(article_id)

        if "title" in changes and changes["title"] is not None and not changes["title"].strip():
            raise InvalidOperationError("Article title is required")

        for field in _EDITABLE_FIELDS:
            if changes.get(field) is not None:
                setattr(article, field, changes[field])
        if changes.get("keywords") is not None:
            article.keyword_list = changes["keywords"]
        if changes.get("reference_links") is not None:
            article.reference_link_list = changes["reference_links"]

        await self._flush()
        logger.info("Article updated", extra={"article_id": article_id})
        return article

    async def delete_article(self, article_id: int) -> None:
        """Delete an article and its group associations."""
        article = await self.require_article(article_id)
        await ArticleAssociationStore(self.session).clear_for_article(article_id)
        await self.session.delete(article)
        await self._flush()
        logger.info("Article deleted", extra={"article_id": article_id})
