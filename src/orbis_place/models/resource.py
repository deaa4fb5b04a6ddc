# src/orbis_place/models/resource.py
"""SQLAlchemy model for marketplace resources (plugins, mods, maps...)."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from orbis_place.db.session import Base
from orbis_place.db.time import utcnow

from .ownership import Owner, OwnerType
from .user import new_id


class Resource(Base):
    """A published resource owned by a user or a team."""

    __tablename__ = "resource"
    __table_args__ = (
        CheckConstraint("download_count >= 0", name="ck_resource_downloads_non_negative"),
        CheckConstraint("like_count >= 0", name="ck_resource_likes_non_negative"),
        Index("ix_resource_owner", "owner_type", "owner_id"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    slug: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    tagline: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    icon_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(String(32), nullable=False, default="PLUGIN")
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="DRAFT")
    download_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    owner_type: Mapped[OwnerType] = mapped_column(
        SAEnum(OwnerType, native_enum=False, length=8), nullable=False
    )
    owner_id: Mapped[str] = mapped_column(String(32), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    @property
    def owner(self) -> Owner:
        return Owner(self.owner_type, self.owner_id)

    @owner.setter
    def owner(self, value: Owner) -> None:
        self.owner_type = value.owner_type
        self.owner_id = value.owner_id
