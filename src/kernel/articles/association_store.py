"""
Many-to-many links between help articles and groups.
"""

from typing import List, Set

from sqlalchemy import delete, select

from src.kernel.errors import InvalidOperationError, NotFoundError
from src.kernel.models.article import ArticleGroup, HelpArticle
from src.kernel.models.group import Group
from src.kernel.storage import SessionStore
from src.logging_config import get_logger

logger = get_logger(__name__)


class ArticleAssociationStore(SessionStore):
    """
    Store for (article, group) association rows.

    Only special-access groups may be linked to articles. Re-linking an
    existing pair is a no-op.
    """

    async def associate(self, article_id: int, group_id: int) -> None:
        """
        Link an article to a special-access group.

        Raises:
            NotFoundError: If the article or group does not exist
            InvalidOperationError: If the group is not a special access group
        """
        if await self._get(HelpArticle, article_id) is None:
            raise NotFoundError(f"Article not found: {article_id}")
        group = await self._get(Group, group_id)
        if group is None:
            raise NotFoundError(f"Group not found: {group_id}")
        if not group.is_special_access_group:
            logger.warning(
                "Rejected association with regular group",
                extra={"article_id": article_id, "group_id": group_id},
            )
            raise InvalidOperationError(
                "Cannot associate article with a non-special access group."
            )

        if await self._get(ArticleGroup, (article_id, group_id)) is not None:
            return
        self.session.add(ArticleGroup(article_id=article_id, group_id=group_id))
        await self._flush()
        logger.info(
            "Article associated",
            extra={"article_id": article_id, "group_id": group_id},
        )

    async def dissociate(self, article_id: int, group_id: int) -> None:
        await self._execute(
            delete(ArticleGroup).where(
                ArticleGroup.article_id == article_id,
                ArticleGroup.group_id == group_id,
            )
        )
        logger.info(
            "Article dissociated",
            extra={"article_id": article_id, "group_id": group_id},
        )

    async def groups_of(self, article_id: int) -> Set[int]:
        result = await self._execute(
            select(ArticleGroup.group_id).where(ArticleGroup.article_id == article_id)
        )
        return set(result.scalars().all())

    async def articles_of(self, group_id: int) -> List[HelpArticle]:
        """Articles linked to the group, in storage (id) order."""
        result = await self._execute(
            select(HelpArticle)
            .join(ArticleGroup, ArticleGroup.article_id == HelpArticle.id)
            .where(ArticleGroup.group_id == group_id)
            .order_by(HelpArticle.id)
        )
        return list(result.scalars().all())

    async def clear_all(self) -> None:
        await self._execute(delete(ArticleGroup))
        logger.info("All article associations cleared")

    async def clear_for_group(self, group_id: int) -> None:
        await self._execute(delete(ArticleGroup).where(ArticleGroup.group_id == group_id))

    async def clear_for_article(self, article_id: int) -> None:
        await self._execute(delete(ArticleGroup).where(ArticleGroup.article_id == article_id))
