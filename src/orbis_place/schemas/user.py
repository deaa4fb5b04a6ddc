"""User profile view objects and the profile patch schema."""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from orbis_place.models import OwnerType, TeamRole, UserRole, UserStatus

from .common import UtcDatetime, ViewModel

WEBSITE_PATTERN = re.compile(r"^https?://[^\s/$.?#][^\s]*$", re.IGNORECASE)


class UserSummary(ViewModel):
    """Minimal user card embedded in other views."""

    id: str
    username: str
    display_name: str | None
    image: str | None


class BadgeDefinition(ViewModel):
    id: str
    name: str
    slug: str
    description: str | None
    icon: str | None
    color: str | None
    rarity: str


class UserBadgeView(ViewModel):
    """A badge award with its definition."""

    id: str
    awarded_at: UtcDatetime
    badge: BadgeDefinition


class TeamSummary(ViewModel):
    id: str
    name: str
    display_name: str
    logo: str | None


class TeamMembershipView(ViewModel):
    """One of the user's team memberships."""

    id: str
    role: TeamRole
    joined_at: UtcDatetime
    team: TeamSummary


class ResourceSummary(ViewModel):
    id: str
    name: str
    slug: str
    tagline: str
    icon_url: str | None
    type: str
    status: str
    download_count: int
    like_count: int
    owner_type: OwnerType
    owner_id: str
    created_at: UtcDatetime
    updated_at: UtcDatetime


class ServerSummary(ViewModel):
    id: str
    name: str
    slug: str
    short_desc: str | None
    logo: str | None
    server_ip: str
    port: int
    status: str
    is_online: bool
    current_players: int
    max_players: int
    owner_type: OwnerType
    owner_id: str
    created_at: UtcDatetime


class ProfileCounts(ViewModel):
    followers: int = 0
    following: int = 0
    owned_resources: int = 0
    owned_servers: int = 0
    badges: int = 0


class UserProfileView(ViewModel):
    """Denormalized user profile returned by the profile endpoints.

    ``email``, ``location`` and ``last_active_at`` are null in public views
    when the matching visibility flag is off.
    """

    id: str
    username: str
    email: str | None = None
    display_name: str | None
    image: str | None
    banner: str | None
    bio: str | None
    location: str | None
    website: str | None
    role: UserRole
    status: UserStatus
    reputation: int
    show_email: bool
    show_location: bool
    show_online_status: bool
    created_at: UtcDatetime
    last_active_at: UtcDatetime | None
    count: ProfileCounts = Field(alias="_count")
    user_badges: list[UserBadgeView] = Field(default_factory=list)
    team_memberships: list[TeamMembershipView] = Field(default_factory=list)
    owned_resources: list[ResourceSummary] = Field(default_factory=list)
    owned_servers: list[ServerSummary] = Field(default_factory=list)


_TEXT_FIELDS = ("display_name", "bio", "location", "website")
_FLAG_FIELDS = ("show_email", "show_location", "show_online_status")


class ProfileUpdateRequest(BaseModel):
    """Partial update of the caller's profile.

    Only fields present in the payload are applied. Text fields are trimmed;
    an empty string or ``null`` clears them. Visibility flags cannot be null.
    """

    display_name: str | None = Field(None, max_length=50, description="Public display name")
    bio: str | None = Field(None, max_length=500, description="Short biography")
    location: str | None = Field(None, max_length=100, description="Free-form location")
    website: str | None = Field(None, max_length=200, description="http(s) URL")
    show_email: bool | None = Field(None, description="Expose email on the public profile")
    show_location: bool | None = Field(None, description="Expose location on the public profile")
    show_online_status: bool | None = Field(
        None, description="Expose last activity on the public profile"
    )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        """Trim surrounding whitespace; blank values become null."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("website")
    @classmethod
    def validate_website(cls, v: str | None) -> str | None:
        """Validate the website is an absolute http(s) URL."""
        if v is None:
            return v
        if not WEBSITE_PATTERN.match(v):
            raise ValueError("Website must be an http:// or https:// URL")
        return v

    @model_validator(mode="after")
    def reject_null_flags(self) -> "ProfileUpdateRequest":
        for name in _FLAG_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} must be true or false")
        return self

    def changes(self) -> dict[str, Any]:
        """Return the fields the client actually sent, keyed by attribute name."""
        return {name: getattr(self, name) for name in self.model_fields_set}
