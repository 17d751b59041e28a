"""Unit tests for GroupService and ArticleService."""

import pytest

from src.kernel.errors import InvalidOperationError, NotFoundError
from src.kernel.models.access_grant import GrantKind


class TestGroupService:
    """Group lifecycle."""

    @pytest.mark.asyncio
    async def test_create_and_list(self, groups):
        g1 = await groups.create_group("Section-01")
        g2 = await groups.create_group("AI-Research", is_special_access_group=True)

        listed = await groups.list_groups()
        assert [g.id for g in listed] == [g1.id, g2.id]
        assert (await groups.get_group_by_name("AI-Research")).is_special_access_group is True

    @pytest.mark.asyncio
    async def test_duplicate_and_empty_names_rejected(self, groups, regular_group):
        with pytest.raises(InvalidOperationError):
            await groups.create_group("Section-01")
        with pytest.raises(InvalidOperationError):
            await groups.create_group("   ")

    @pytest.mark.asyncio
    async def test_require_missing_group(self, groups):
        assert await groups.get_group(9999) is None
        with pytest.raises(NotFoundError):
            await groups.require_group(9999)

    @pytest.mark.asyncio
    async def test_rename(self, groups, regular_group):
        updated = await groups.update_group(regular_group.id, name="Section-01A")
        assert updated.name == "Section-01A"

    @pytest.mark.asyncio
    async def test_rename_to_taken_name_rejected(self, groups, regular_group, special_group):
        with pytest.raises(InvalidOperationError):
            await groups.update_group(regular_group.id, name="AI-Research")

    @pytest.mark.asyncio
    async def test_flag_change_without_articles(self, groups, regular_group):
        updated = await groups.update_group(regular_group.id, is_special_access_group=True)
        assert updated.is_special_access_group is True

    @pytest.mark.asyncio
    async def test_flag_frozen_while_articles_reference_group(
        self, groups, articles, associations, special_group
    ):
        article = await articles.create_article(title="GPU quota")
        await associations.associate(article.id, special_group.id)

        with pytest.raises(InvalidOperationError):
            await groups.update_group(special_group.id, is_special_access_group=False)

        # Same value is not a change
        await groups.update_group(special_group.id, is_special_access_group=True)

    @pytest.mark.asyncio
    async def test_delete_cascades(
        self,
        groups,
        memberships,
        grants,
        articles,
        associations,
        resolver,
        special_group,
        regular_group,
        test_student,
        test_other_student,
    ):
        article = await articles.create_article(title="GPU quota")
        await associations.associate(article.id, special_group.id)
        await grants.grant(special_group.id, "alice", GrantKind.STUDENT_VIEWER)
        await memberships.add_member(regular_group.id, "bob")
        assert await resolver.can_view(test_other_student, article) is False

        special_id, regular_id = special_group.id, regular_group.id
        await groups.delete_group(special_id)
        await groups.delete_group(regular_id)

        assert await groups.get_group(special_id) is None
        assert await grants.has_any_grant(special_id, "alice") is False
        assert await memberships.list_members(regular_id) == set()
        # Orphaned article becomes public
        assert await associations.groups_of(article.id) == set()
        assert await resolver.can_view(test_other_student, article) is True

    @pytest.mark.asyncio
    async def test_delete_missing_group(self, groups):
        with pytest.raises(NotFoundError):
            await groups.delete_group(9999)


class TestArticleService:
    """Article CRUD."""

    @pytest.mark.asyncio
    async def test_create_with_lists(self, articles):
        article = await articles.create_article(
            title="  Submitting homework ",
            header="Homework",
            keywords=["upload", " deadline "],
            reference_links=["https://example.edu/a", "https://example.edu/b"],
        )

        assert article.id is not None
        assert article.title == "Submitting homework"
        assert article.keyword_list == ["upload", "deadline"]
        assert article.reference_link_list == ["https://example.edu/a", "https://example.edu/b"]

    @pytest.mark.asyncio
    async def test_empty_title_rejected(self, articles):
        with pytest.raises(InvalidOperationError):
            await articles.create_article(title=" ")

    @pytest.mark.asyncio
    async def test_update(self, articles):
        article = await articles.create_article(title="Draft", keywords=["old"])

        updated = await articles.update_article(
            article.id,
            title="Final",
            keywords=["new", "shiny"],
            body=None,
        )

        assert updated.title == "Final"
        assert updated.keyword_list == ["new", "shiny"]

    @pytest.mark.asyncio
    async def test_update_rejects_blank_title(self, articles):
        article = await articles.create_article(title="Draft")
        with pytest.raises(InvalidOperationError):
            await articles.update_article(article.id, title="")

    @pytest.mark.asyncio
    async def test_update_missing_article(self, articles):
        with pytest.raises(NotFoundError):
            await articles.update_article(9999, title="x")

    @pytest.mark.asyncio
    async def test_delete_clears_associations(self, articles, associations, special_group):
        article = await articles.create_article(title="GPU quota")
        await associations.associate(article.id, special_group.id)

        article_id = article.id
        await articles.delete_article(article_id)

        assert await articles.get_article(article_id) is None
        assert await associations.articles_of(special_group.id) == []
        assert await articles.list_articles() == []
