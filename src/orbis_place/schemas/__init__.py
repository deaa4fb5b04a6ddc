# src/orbis_place/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .team import TeamMemberView, TeamProfileView
from .user import ProfileUpdateRequest, UserProfileView, UserSummary

__all__ = [
    "TeamMemberView", "TeamProfileView",
    "ProfileUpdateRequest", "UserProfileView", "UserSummary",
]
