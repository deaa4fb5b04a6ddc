# src/orbis_place/models/server.py
"""SQLAlchemy model for listed game servers."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Index, Integer, String, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from orbis_place.db.session import Base
from orbis_place.db.time import utcnow

from .ownership import Owner, OwnerType
from .user import new_id


class Server(Base):
    """A game server listing owned by a user or a team."""

    __tablename__ = "server"
    __table_args__ = (
        CheckConstraint("current_players <= max_players", name="ck_server_player_capacity"),
        CheckConstraint("current_players >= 0", name="ck_server_players_non_negative"),
        Index("ix_server_owner", "owner_type", "owner_id"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    short_desc: Mapped[str | None] = mapped_column(String(200), nullable=True)
    logo: Mapped[str | None] = mapped_column(Text, nullable=True)
    server_ip: Mapped[str] = mapped_column(String(255), nullable=False)
    port: Mapped[int] = mapped_column(Integer, nullable=False, default=5520)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="PENDING")
    is_online: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    current_players: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    max_players: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    owner_type: Mapped[OwnerType] = mapped_column(
        SAEnum(OwnerType, native_enum=False, length=8), nullable=False
    )
    owner_id: Mapped[str] = mapped_column(String(32), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    @property
    def owner(self) -> Owner:
        return Owner(self.owner_type, self.owner_id)

    @owner.setter
    def owner(self, value: Owner) -> None:
        self.owner_type = value.owner_type
        self.owner_id = value.owner_id
