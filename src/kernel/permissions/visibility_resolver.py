"""
Visibility decisions for help articles and groups.

An article with no group association is visible to everyone. Otherwise the
user must qualify for at least one associated group:

- special-access group: the user holds any grant kind on it
- regular group: the user is a member of it

Every call reads current store state; nothing is cached between calls.
Whenever a qualifying grant or membership cannot be established the answer
is False.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.kernel.articles.association_store import ArticleAssociationStore
from src.kernel.groups.membership_store import GroupMembershipStore
from src.kernel.models.article import HelpArticle
from src.kernel.models.group import Group
from src.kernel.models.user import User, UserRole
from src.kernel.permissions.access_grant_store import AccessGrantStore
from src.kernel.storage import SessionStore
from src.logging_config import get_logger

logger = get_logger(__name__)


class VisibilityResolver(SessionStore):
    """
    Decide whether a user may see an article or a group's content.

    Collaborating stores are injected; by default they share the given
    session.
    """

    def __init__(
        self,
        session: AsyncSession,
        associations: Optional[ArticleAssociationStore] = None,
        memberships: Optional[GroupMembershipStore] = None,
        grants: Optional[AccessGrantStore] = None,
    ):
        super().__init__(session)
        self.associations = associations or ArticleAssociationStore(session)
        self.memberships = memberships or GroupMembershipStore(session)
        self.grants = grants or AccessGrantStore(session)

    async def can_view(self, user: User, article: HelpArticle) -> bool:
        """OR across the article's groups; ungated articles are public."""
        group_ids = await self.associations.groups_of(article.id)
        if not group_ids:
            return True

        for group_id in sorted(group_ids):
            group = await self._get(Group, group_id)
            if group is None:
                continue
            if await self.can_view_group(user, group):
                logger.debug(
                    "Article visible through group",
                    extra={"article_id": article.id, "group_id": group_id},
                )
                return True

        logger.debug("Article hidden", extra={"article_id": article.id})
        return False

    async def can_view_article_id(self, user: User, article_id: int) -> bool:
        """Like can_view, but unknown articles resolve to False."""
        article = await self._get(HelpArticle, article_id)
        if article is None:
            return False
        return await self.can_view(user, article)

    async def can_view_group(self, user: User, group: Group) -> bool:
        """Whether the user qualifies for this single group."""
        if group.is_special_access_group:
            return await self.has_special_view_rights(user, group.id)
        return await self.memberships.is_member(group.id, user.username)

    async def has_special_view_rights(self, user: User, group_id: int) -> bool:
        """
        Any of the four grant kinds qualifies.

        Users holding the system-wide Admin role are refused here even when
        they hold a grant.
        """
        if UserRole.ADMIN in user.roles:
            return False
        return await self.grants.has_any_grant(group_id, user.username)
