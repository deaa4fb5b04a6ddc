# src/orbis_place/models/user.py
"""SQLAlchemy models for user accounts and the follow graph."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from orbis_place.db.session import Base
from orbis_place.db.time import utcnow

if TYPE_CHECKING:
    from .badge import UserBadge
    from .team import TeamMember


def new_id() -> str:
    """Return a fresh opaque primary key."""
    return uuid.uuid4().hex


class UserRole(str, Enum):
    USER = "USER"
    MODERATOR = "MODERATOR"
    ADMIN = "ADMIN"


class UserStatus(str, Enum):
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    BANNED = "BANNED"


class User(Base):
    """A marketplace account with its public profile fields."""

    __tablename__ = "user"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    # Case-sensitive handle, fixed once the account exists.
    username: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    image: Mapped[str | None] = mapped_column(Text, nullable=True)
    banner: Mapped[str | None] = mapped_column(Text, nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str | None] = mapped_column(String(100), nullable=True)
    website: Mapped[str | None] = mapped_column(String(200), nullable=True)
    role: Mapped[UserRole] = mapped_column(
        SAEnum(UserRole, native_enum=False, length=16), nullable=False, default=UserRole.USER
    )
    status: Mapped[UserStatus] = mapped_column(
        SAEnum(UserStatus, native_enum=False, length=16), nullable=False, default=UserStatus.ACTIVE
    )
    reputation: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    show_email: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    show_location: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    show_online_status: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
    last_active_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    team_memberships: Mapped[list[TeamMember]] = relationship(
        "TeamMember",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    user_badges: Mapped[list[UserBadge]] = relationship(
        "UserBadge",
        back_populates="user",
        cascade="all, delete-orphan",
    )


class Follow(Base):
    """Directed follow edge between two users."""

    __tablename__ = "follow"
    __table_args__ = (CheckConstraint("follower_id <> following_id", name="ck_follow_not_self"),)

    follower_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("user.id", ondelete="CASCADE"), primary_key=True
    )
    following_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("user.id", ondelete="CASCADE"), primary_key=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

