"""
Per-user grants on special-access groups.
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from src.kernel.models.base import Base


class GrantKind(str, Enum):
    """Independent, non-hierarchical rights on one special-access group."""
    ADMIN = "admin"
    INSTRUCTOR_VIEWER = "instructor_viewer"
    INSTRUCTOR_ADMIN = "instructor_admin"
    STUDENT_VIEWER = "student_viewer"


class AccessGrant(Base):
    """
    One grant row.

    Rows carry a surrogate key and no uniqueness constraint: granting the
    same kind twice stores two rows.
    """

    __tablename__ = "access_grants"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    group_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
    )
    username: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    kind: Mapped[GrantKind] = mapped_column(
        String(50),
        nullable=False,
    )
    granted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_access_grants_group_kind", "group_id", "kind"),
        Index("ix_access_grants_group_user", "group_id", "username"),
    )

    def __repr__(self) -> str:
        kind = self.kind.value if hasattr(self.kind, "value") else self.kind
        return f"<AccessGrant group={self.group_id} user={self.username} kind={kind}>"
