"""
User model for the user directory.

Users are owned by the external directory; the core only reads the
username and the set of roles.
"""

from enum import Enum
from typing import List, Optional, Set

from sqlalchemy import Boolean, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.kernel.models.base import Base, TimestampMixin


class UserRole(str, Enum):
    """System-wide roles. A user may hold several."""
    ADMIN = "admin"
    INSTRUCTOR = "instructor"
    STUDENT = "student"


class User(Base, TimestampMixin):
    """User account model."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    username: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    email: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    full_name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    role_assignments: Mapped[List["UserRoleAssignment"]] = relationship(
        "UserRoleAssignment",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def roles(self) -> Set[UserRole]:
        # SQLite hands back plain strings; normalise so set lookups work
        return {UserRole(a.role) for a in self.role_assignments}

    def has_role(self, role: UserRole) -> bool:
        return role in self.roles

    def __repr__(self) -> str:
        return f"<User {self.username}>"


class UserRoleAssignment(Base):
    """One role held by one user."""

    __tablename__ = "user_roles"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[UserRole] = mapped_column(
        String(50),
        nullable=False,
    )

    user: Mapped["User"] = relationship("User", back_populates="role_assignments")

    __table_args__ = (
        UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),
    )
