"""Unit tests for VisibilityResolver."""

import pytest

from src.kernel.models.access_grant import GrantKind
from src.kernel.models.article import ArticleGroup


class TestUngatedArticles:
    """Articles without groups are public."""

    @pytest.mark.asyncio
    async def test_public_article_visible_to_everyone(
        self, articles, resolver, test_student, test_instructor, test_admin
    ):
        article = await articles.create_article(title="Getting started")

        for user in (test_student, test_instructor, test_admin):
            assert await resolver.can_view(user, article) is True

    @pytest.mark.asyncio
    async def test_unknown_article_id_is_not_visible(self, resolver, test_student):
        assert await resolver.can_view_article_id(test_student, 9999) is False


class TestSpecialGroups:
    """Grant-based visibility on special-access groups."""

    @pytest.mark.asyncio
    async def test_research_group_scenario(
        self,
        articles,
        associations,
        grants,
        resolver,
        special_group,
        test_student,
        test_other_student,
    ):
        a42 = await articles.create_article(title="Using the GPU cluster")
        a43 = await articles.create_article(title="Library opening hours")
        await associations.associate(a42.id, special_group.id)
        await grants.grant(special_group.id, "alice", GrantKind.STUDENT_VIEWER)

        assert await resolver.can_view(test_student, a42) is True
        assert await resolver.can_view(test_student, a43) is True
        assert await resolver.can_view(test_other_student, a42) is False
        assert await resolver.can_view(test_other_student, a43) is True

        await grants.revoke(special_group.id, "alice", GrantKind.STUDENT_VIEWER)
        assert await resolver.can_view(test_student, a42) is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("kind", list(GrantKind))
    async def test_any_grant_kind_qualifies(
        self, articles, associations, grants, resolver, special_group, test_instructor, kind
    ):
        article = await articles.create_article(title="Gated")
        await associations.associate(article.id, special_group.id)
        await grants.grant(special_group.id, "ivan", kind)

        assert await resolver.can_view(test_instructor, article) is True

    @pytest.mark.asyncio
    async def test_any_group_suffices(
        self, groups, articles, associations, grants, resolver, special_group, test_student
    ):
        other = await groups.create_group("Robotics", is_special_access_group=True)
        article = await articles.create_article(title="Shared cluster")
        await associations.associate(article.id, special_group.id)
        await associations.associate(article.id, other.id)
        await grants.grant(other.id, "alice", GrantKind.STUDENT_VIEWER)

        assert await resolver.can_view(test_student, article) is True

    @pytest.mark.asyncio
    async def test_grant_on_other_group_does_not_leak(
        self, groups, articles, associations, grants, resolver, special_group, test_student
    ):
        other = await groups.create_group("Robotics", is_special_access_group=True)
        article = await articles.create_article(title="GPU quota")
        await associations.associate(article.id, special_group.id)
        await grants.grant(other.id, "alice", GrantKind.STUDENT_VIEWER)

        assert await resolver.can_view(test_student, article) is False

    @pytest.mark.asyncio
    async def test_system_admin_role_is_refused_on_special_groups(
        self, articles, associations, grants, resolver, special_group, test_admin
    ):
        # Holders of the system Admin role do not qualify through grants
        article = await articles.create_article(title="GPU quota")
        await associations.associate(article.id, special_group.id)
        await grants.grant(special_group.id, "root", GrantKind.STUDENT_VIEWER)

        assert await resolver.has_special_view_rights(test_admin, special_group.id) is False
        assert await resolver.can_view(test_admin, article) is False

    @pytest.mark.asyncio
    async def test_decisions_reflect_current_state(
        self, articles, associations, grants, resolver, special_group, test_student
    ):
        article = await articles.create_article(title="GPU quota")
        assert await resolver.can_view(test_student, article) is True

        await associations.associate(article.id, special_group.id)
        assert await resolver.can_view(test_student, article) is False

        await grants.grant(special_group.id, "alice", GrantKind.STUDENT_VIEWER)
        assert await resolver.can_view_article_id(test_student, article.id) is True

        await associations.dissociate(article.id, special_group.id)
        await grants.revoke(special_group.id, "alice", GrantKind.STUDENT_VIEWER)
        assert await resolver.can_view(test_student, article) is True


class TestRegularGroups:
    """Membership-based visibility for rows linking articles to regular groups."""

    @pytest.mark.asyncio
    async def test_member_sees_article(
        self,
        db_session,
        articles,
        memberships,
        resolver,
        regular_group,
        test_student,
        test_other_student,
    ):
        article = await articles.create_article(title="Section notes")
        # Such rows predate the special-group restriction on associate()
        db_session.add(ArticleGroup(article_id=article.id, group_id=regular_group.id))
        await db_session.flush()
        await memberships.add_member(regular_group.id, "alice")

        assert await resolver.can_view(test_student, article) is True
        assert await resolver.can_view(test_other_student, article) is False

    @pytest.mark.asyncio
    async def test_can_view_group(
        self, memberships, grants, resolver, regular_group, special_group, test_student
    ):
        assert await resolver.can_view_group(test_student, regular_group) is False
        assert await resolver.can_view_group(test_student, special_group) is False

        await memberships.add_member(regular_group.id, "alice")
        await grants.grant(special_group.id, "alice", GrantKind.STUDENT_VIEWER)

        assert await resolver.can_view_group(test_student, regular_group) is True
        assert await resolver.can_view_group(test_student, special_group) is True

    @pytest.mark.asyncio
    async def test_membership_does_not_open_special_group(
        self, db_session, memberships, resolver, special_group, test_student
    ):
        await memberships.add_member(special_group.id, "alice")

        assert await resolver.can_view_group(test_student, special_group) is False
