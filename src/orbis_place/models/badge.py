# src/orbis_place/models/badge.py
"""SQLAlchemy models for badge definitions and awards."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from orbis_place.db.session import Base
from orbis_place.db.time import utcnow

from .user import new_id

if TYPE_CHECKING:
    from .user import User


class Badge(Base):
    """Badge definition issued by administrators."""

    __tablename__ = "badge"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    slug: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    icon: Mapped[str | None] = mapped_column(Text, nullable=True)
    color: Mapped[str | None] = mapped_column(String(16), nullable=True)
    rarity: Mapped[str] = mapped_column(String(16), nullable=False, default="COMMON")


class UserBadge(Base):
    """Award record; a user holds a given badge at most once."""

    __tablename__ = "user_badge"
    __table_args__ = (UniqueConstraint("user_id", "badge_id", name="uq_user_badge"),)

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("user.id", ondelete="CASCADE"), nullable=False
    )
    badge_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("badge.id", ondelete="CASCADE"), nullable=False
    )
    awarded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    user: Mapped[User] = relationship("User", back_populates="user_badges")
    badge: Mapped[Badge] = relationship("Badge", lazy="joined")
