# src/orbis_place/models/__init__.py
"""SQLAlchemy models for the Orbis Place application."""

from .badge import Badge, UserBadge
from .ownership import Owner, OwnerType
from .resource import Resource
from .server import Server
from .team import Team, TeamMember, TeamRole
from .user import Follow, User, UserRole, UserStatus

__all__ = [
    "Badge", "UserBadge",
    "Owner", "OwnerType",
    "Resource",
    "Server",
    "Team", "TeamMember", "TeamRole",
    "Follow", "User", "UserRole", "UserStatus",
]
