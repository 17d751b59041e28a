"""
Free-text search over help articles, filtered by visibility.
"""

from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import get_settings
from src.kernel.groups.membership_store import GroupMembershipStore
from src.kernel.models.article import ArticleGroup, HelpArticle
from src.kernel.models.group import Group
from src.kernel.models.user import User
from src.kernel.permissions.visibility_resolver import VisibilityResolver
from src.kernel.storage import SessionStore
from src.logging_config import get_logger

logger = get_logger(__name__)

# Fields matched by search; the body is deliberately not searched
SEARCH_FIELDS = (
    HelpArticle.title,
    HelpArticle.short_description,
    HelpArticle.keywords,
)


class SearchEngine(SessionStore):
    """
    Search help articles for one user.

    Candidates are articles whose title, short description or keywords
    contain the query (case-insensitive). The optional group filter narrows
    candidates to one group's articles, and every candidate must pass the
    visibility resolver. Results keep storage order; there is no ranking
    and no pagination.
    """

    def __init__(
        self,
        session: AsyncSession,
        resolver: Optional[VisibilityResolver] = None,
        memberships: Optional[GroupMembershipStore] = None,
        all_groups_sentinel: Optional[str] = None,
    ):
        super().__init__(session)
        self.resolver = resolver or VisibilityResolver(session)
        self.memberships = memberships or self.resolver.memberships
        self.all_groups_sentinel = (
            all_groups_sentinel or get_settings().search_all_groups_sentinel
        )

    async def search(
        self,
        user: User,
        query_text: str,
        group_filter: Optional[str] = None,
    ) -> List[HelpArticle]:
        """
        Run a search.

        Args:
            user: Requesting user
            query_text: Non-empty search text
            group_filter: Group name, or the "all" sentinel / None for no
                group restriction

        Returns:
            Visible matching articles in storage order

        Raises:
            ValueError: If query_text is empty
        """
        query_text = (query_text or "").strip()
        if not query_text:
            raise ValueError("Search query must not be empty")

        statement = (
            select(HelpArticle)
            .where(or_(*(field.icontains(query_text, autoescape=True) for field in SEARCH_FIELDS)))
            .order_by(HelpArticle.id)
        )

        if group_filter and group_filter.casefold() != self.all_groups_sentinel.casefold():
            group = await self._filter_group(user, group_filter)
            if group is None:
                return []
            statement = statement.join(
                ArticleGroup, ArticleGroup.article_id == HelpArticle.id
            ).where(ArticleGroup.group_id == group.id)

        result = await self._execute(statement)
        candidates = list(result.scalars().all())

        visible = [a for a in candidates if await self.resolver.can_view(user, a)]
        logger.info(
            "Search completed",
            extra={
                "group_filter": group_filter or self.all_groups_sentinel,
                "candidates": len(candidates),
                "results": len(visible),
            },
        )
        return visible

    async def list_visible(self, user: User) -> List[HelpArticle]:
        """Every article the user can view, in storage order."""
        result = await self._execute(select(HelpArticle).order_by(HelpArticle.id))
        return [a for a in result.scalars().all() if await self.resolver.can_view(user, a)]

    async def _filter_group(self, user: User, group_name: str) -> Optional[Group]:
        """
        Resolve the filter group.

        Returns None (no results) when the group is unknown, or when it is a
        regular group the user is not a member of.
        """
        result = await self._execute(select(Group).where(Group.name == group_name))
        group = result.scalar_one_or_none()
        if group is None:
            logger.info("Search filter names unknown group", extra={"group_filter": group_name})
            return None
        if not group.is_special_access_group and not await self.memberships.is_member(
            group.id, user.username
        ):
            return None
        return group
