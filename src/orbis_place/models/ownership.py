"""Tagged ownership shared by resources and servers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OwnerType(str, Enum):
    """Kind of entity that owns a resource or server."""

    USER = "USER"
    TEAM = "TEAM"


@dataclass(frozen=True)
class Owner:
    """An owner reference: which kind of entity, and its id."""

    owner_type: OwnerType
    owner_id: str

    @classmethod
    def user(cls, user_id: str) -> Owner:
        return cls(OwnerType.USER, user_id)

    @classmethod
    def team(cls, team_id: str) -> Owner:
        return cls(OwnerType.TEAM, team_id)
