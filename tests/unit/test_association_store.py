"""Unit tests for ArticleAssociationStore."""

import pytest

from src.kernel.errors import InvalidOperationError, NotFoundError


class TestArticleAssociationStore:
    """Article-group links."""

    @pytest.mark.asyncio
    async def test_associate_and_lookup(self, articles, associations, special_group):
        article = await articles.create_article(title="GPU quota")
        await associations.associate(article.id, special_group.id)

        assert await associations.groups_of(article.id) == {special_group.id}
        linked = await associations.articles_of(special_group.id)
        assert [a.id for a in linked] == [article.id]

    @pytest.mark.asyncio
    async def test_associate_is_idempotent(self, articles, associations, special_group):
        article = await articles.create_article(title="GPU quota")
        await associations.associate(article.id, special_group.id)
        await associations.associate(article.id, special_group.id)

        assert len(await associations.articles_of(special_group.id)) == 1

    @pytest.mark.asyncio
    async def test_regular_group_rejected(self, articles, associations, regular_group):
        article = await articles.create_article(title="Lab hours")

        with pytest.raises(InvalidOperationError) as exc_info:
            await associations.associate(article.id, regular_group.id)

        assert exc_info.value.message == "Cannot associate article with a non-special access group."
        assert await associations.groups_of(article.id) == set()

    @pytest.mark.asyncio
    async def test_missing_article_or_group(self, articles, associations, special_group):
        article = await articles.create_article(title="Lab hours")

        with pytest.raises(NotFoundError):
            await associations.associate(9999, special_group.id)
        with pytest.raises(NotFoundError):
            await associations.associate(article.id, 9999)

    @pytest.mark.asyncio
    async def test_articles_of_keeps_storage_order(self, groups, articles, associations):
        group = await groups.create_group("Robotics", is_special_access_group=True)
        first = await articles.create_article(title="First")
        second = await articles.create_article(title="Second")
        # Link in reverse order
        await associations.associate(second.id, group.id)
        await associations.associate(first.id, group.id)

        linked = await associations.articles_of(group.id)
        assert [a.id for a in linked] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_article_in_several_groups(self, groups, articles, associations, special_group):
        other = await groups.create_group("Robotics", is_special_access_group=True)
        article = await articles.create_article(title="Shared cluster")
        await associations.associate(article.id, special_group.id)
        await associations.associate(article.id, other.id)

        assert await associations.groups_of(article.id) == {special_group.id, other.id}

    @pytest.mark.asyncio
    async def test_dissociate(self, articles, associations, special_group):
        article = await articles.create_article(title="GPU quota")
        await associations.associate(article.id, special_group.id)
        await associations.dissociate(article.id, special_group.id)

        assert await associations.groups_of(article.id) == set()
        assert await associations.articles_of(special_group.id) == []

    @pytest.mark.asyncio
    async def test_clear_all(self, groups, articles, associations, special_group):
        other = await groups.create_group("Robotics", is_special_access_group=True)
        a1 = await articles.create_article(title="One")
        a2 = await articles.create_article(title="Two")
        await associations.associate(a1.id, special_group.id)
        await associations.associate(a2.id, other.id)

        await associations.clear_all()

        assert await associations.groups_of(a1.id) == set()
        assert await associations.groups_of(a2.id) == set()
