"""
Help article and article-group association models.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from src.kernel.models.base import Base, TimestampMixin, join_list, split_list


class HelpArticle(Base, TimestampMixin):
    """
    A help article.

    Keywords and reference links are ordered lists stored comma-delimited.
    Visibility is never stored here; it is derived from the association
    and grant tables on every request.
    """

    __tablename__ = "help_articles"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    header: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    short_description: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
    )
    keywords: Mapped[str] = mapped_column(
        String(500),
        default="",
        nullable=False,
    )
    body: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    reference_links: Mapped[str] = mapped_column(
        String(1000),
        default="",
        nullable=False,
    )

    @property
    def keyword_list(self) -> List[str]:
        return split_list(self.keywords)

    @keyword_list.setter
    def keyword_list(self, items: List[str]) -> None:
        self.keywords = join_list(items)

    @property
    def reference_link_list(self) -> List[str]:
        return split_list(self.reference_links)

    @reference_link_list.setter
    def reference_link_list(self, items: List[str]) -> None:
        self.reference_links = join_list(items)

    def __repr__(self) -> str:
        return f"<HelpArticle {self.id} {self.title!r}>"


class ArticleGroup(Base):
    """Association of an article with a group."""

    __tablename__ = "article_groups"

    article_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("help_articles.id", ondelete="CASCADE"),
        primary_key=True,
    )
    group_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("groups.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
