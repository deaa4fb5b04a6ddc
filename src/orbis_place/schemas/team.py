"""Team profile view objects."""

from pydantic import Field

from orbis_place.models import TeamRole

from .common import UtcDatetime, ViewModel
from .user import ResourceSummary, ServerSummary, UserSummary


class TeamMemberView(ViewModel):
    """Team member row; user fields are repeated flat for list rendering."""

    id: str
    username: str
    display_name: str | None
    image: str | None
    role: TeamRole
    joined_at: UtcDatetime
    user: UserSummary


class TeamCounts(ViewModel):
    members: int = 0
    owned_resources: int = 0
    owned_servers: int = 0


class TeamProfileView(ViewModel):
    """Denormalized team profile returned by ``GET /teams/{team_name}``."""

    id: str
    name: str
    display_name: str
    description: str | None
    logo: str | None
    banner: str | None
    website: str | None
    discord_url: str | None
    created_at: UtcDatetime
    updated_at: UtcDatetime
    owner_id: str
    owner: UserSummary
    members: list[TeamMemberView] = Field(default_factory=list)
    count: TeamCounts = Field(alias="_count")
    owned_resources: list[ResourceSummary] = Field(default_factory=list)
    owned_servers: list[ServerSummary] = Field(default_factory=list)
