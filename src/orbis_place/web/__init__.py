"""Client-side profile presentation: fetching, page state and formatting."""

from .client import ProfileApiClient, ProfileFetchError, ProfileNotFound
from .formatting import format_date, get_initials, pluralize
from .pages import PageStatus, ProfileHeader, Tab, TeamProfilePage, UserProfilePage

__all__ = [
    "ProfileApiClient", "ProfileFetchError", "ProfileNotFound",
    "format_date", "get_initials", "pluralize",
    "PageStatus", "ProfileHeader", "Tab", "TeamProfilePage", "UserProfilePage",
]
