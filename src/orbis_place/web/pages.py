"""Client-side profile pages.

A page owns one fetch per route key plus purely local UI state (the active
tab). All displayed values are derived from the single payload the page
fetched; switching tabs never goes back to the network.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from orbis_place.web.client import ProfileApiClient, ProfileFetchError, ProfileNotFound
from orbis_place.web.formatting import format_date, get_initials, pluralize

logger = logging.getLogger(__name__)

BADGE_PREVIEW_SIZE = 8
DEFAULT_ROLE = "USER"


class PageStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class Tab:
    id: str
    label: str
    count: int | None = None


@dataclass(frozen=True)
class ProfileHeader:
    """Everything the page header renders, already formatted."""

    title: str
    handle: str
    initials: str
    image: str | None
    banner: str | None
    created: str
    stats: list[str] = field(default_factory=list)
    role_badge: str | None = None
    online: bool = False
    location: str | None = None
    website: str | None = None
    discord_url: str | None = None
    bio: str | None = None


class ProfilePage(ABC):
    """Shared loading/error/tab state for the user and team pages."""

    not_found_message = "Not found"
    failure_message = "Failed to load"
    tab_ids: tuple[str, ...] = ("overview",)

    def __init__(
        self,
        client: ProfileApiClient,
        key: str,
        *,
        on_back: Callable[[], None] | None = None,
    ) -> None:
        self.client = client
        self.key = key
        self.on_back = on_back
        self.status = PageStatus.LOADING
        self.error: str | None = None
        self.data: dict[str, Any] | None = None
        self.active_tab = self.tab_ids[0]
        self._generation = 0

    @property
    def loading(self) -> bool:
        return self.status is PageStatus.LOADING

    @property
    def can_go_back(self) -> bool:
        """Error states offer exactly one action: going back."""
        return self.status in (PageStatus.NOT_FOUND, PageStatus.FAILED)

    @abstractmethod
    async def _fetch(self, key: str) -> dict[str, Any]:
        """Fetch the payload for ``key`` from the API client."""

    async def load(self) -> PageStatus:
        """Fetch the payload for the current key and settle into a final state.

        Never raises. If the key changed while the request was in flight,
        the late result is dropped and the newer load decides the state.
        """
        self._generation += 1
        generation = self._generation
        key = self.key
        self.status = PageStatus.LOADING
        self.error = None
        self.data = None

        data: dict[str, Any] | None = None
        status = PageStatus.READY
        error: str | None = None
        try:
            data = await self._fetch(key)
        except ProfileNotFound:
            status, error = PageStatus.NOT_FOUND, self.not_found_message
        except ProfileFetchError as err:
            logger.warning("Failed to load %s: %s", key, err)
            status, error = PageStatus.FAILED, self.failure_message
        except Exception:
            logger.exception("Unexpected error while loading %s", key)
            status, error = PageStatus.FAILED, self.failure_message

        if generation != self._generation:
            logger.debug("Discarding stale result for %s", key)
            return self.status

        self.data, self.status, self.error = data, status, error
        return self.status

    async def navigate(self, key: str) -> PageStatus:
        """Point the page at a new route key and load it from scratch."""
        self.key = key
        self.active_tab = self.tab_ids[0]
        return await self.load()

    def select_tab(self, tab_id: str) -> None:
        if tab_id not in self.tab_ids:
            raise ValueError(f"Unknown tab {tab_id!r}; expected one of {', '.join(self.tab_ids)}")
        self.active_tab = tab_id

    def go_back(self) -> None:
        if self.on_back is not None:
            self.on_back()

    def _require_data(self) -> dict[str, Any]:
        if self.status is not PageStatus.READY or self.data is None:
            raise RuntimeError(f"Page for {self.key!r} is not ready ({self.status.value})")
        return self.data


class UserProfilePage(ProfilePage):
    """Page behind ``/users/<username>``."""

    not_found_message = "User not found"
    failure_message = "Failed to load user profile"
    tab_ids = ("overview", "resources", "servers")

    async def _fetch(self, key: str) -> dict[str, Any]:
        return await self.client.fetch_user(key)

    def tabs(self) -> list[Tab]:
        counts = self._require_data()["_count"]
        return [
            Tab("overview", "Overview"),
            Tab("resources", "Resources", counts["ownedResources"]),
            Tab("servers", "Servers", counts["ownedServers"]),
        ]

    def header(self) -> ProfileHeader:
        user = self._require_data()
        name = user.get("displayName") or user["username"]
        counts = user["_count"]
        role = user.get("role") or DEFAULT_ROLE
        return ProfileHeader(
            title=name,
            handle=f"@{user['username']}",
            initials=get_initials(name),
            image=user.get("image"),
            banner=user.get("banner"),
            created=format_date(user["createdAt"]),
            stats=[
                pluralize(counts["followers"], "follower"),
                f"{counts['following']} following",
                pluralize(user.get("reputation", 0), "reputation point"),
            ],
            role_badge=role if role != DEFAULT_ROLE else None,
            online=bool(user.get("showOnlineStatus")),
            location=user.get("location") if user.get("showLocation") else None,
            website=user.get("website"),
            bio=user.get("bio"),
        )

    def last_active(self) -> str | None:
        user = self._require_data()
        if not user.get("showOnlineStatus") or not user.get("lastActiveAt"):
            return None
        return format_date(user["lastActiveAt"])

    def badge_preview(self) -> tuple[list[dict[str, Any]], str | None]:
        """Return the badges shown inline and the "view all" label, if any."""
        user = self._require_data()
        badges = user.get("userBadges", [])
        total = user.get("_count", {}).get("badges", len(badges))
        overflow = f"View all {total} badges" if total > BADGE_PREVIEW_SIZE else None
        return badges[:BADGE_PREVIEW_SIZE], overflow

    def memberships(self) -> list[dict[str, Any]]:
        rows = []
        for membership in self._require_data().get("teamMemberships", []):
            team = membership["team"]
            rows.append(
                {
                    "name": team["name"],
                    "displayName": team["displayName"],
                    "logo": team.get("logo"),
                    "initials": get_initials(team["displayName"]),
                    "role": membership["role"],
                    "joined": format_date(membership["joinedAt"]),
                }
            )
        return rows


class TeamProfilePage(ProfilePage):
    """Page behind ``/teams/<teamName>``."""

    not_found_message = "Team not found"
    failure_message = "Failed to load team"
    tab_ids = ("overview", "resources", "servers", "members")

    async def _fetch(self, key: str) -> dict[str, Any]:
        return await self.client.fetch_team(key)

    def _counts(self) -> dict[str, int]:
        team = self._require_data()
        counts = team.get("_count") or {}
        return {
            "members": counts.get("members", len(team.get("members", []))),
            "ownedResources": counts.get("ownedResources", len(team.get("ownedResources", []))),
            "ownedServers": counts.get("ownedServers", len(team.get("ownedServers", []))),
        }

    def tabs(self) -> list[Tab]:
        counts = self._counts()
        return [
            Tab("overview", "Overview"),
            Tab("resources", "Resources", counts["ownedResources"]),
            Tab("servers", "Servers", counts["ownedServers"]),
            Tab("members", "Members", counts["members"]),
        ]

    def header(self) -> ProfileHeader:
        team = self._require_data()
        counts = self._counts()
        return ProfileHeader(
            title=team["displayName"],
            handle=f"@{team['name']}",
            initials=get_initials(team["displayName"]),
            image=team.get("logo"),
            banner=team.get("banner"),
            created=f"Created {format_date(team['createdAt'])}",
            stats=[
                pluralize(counts["members"], "member"),
                pluralize(counts["ownedResources"], "resource"),
                pluralize(counts["ownedServers"], "server"),
            ],
            website=team.get("website"),
            discord_url=team.get("discordUrl"),
            bio=team.get("description"),
        )

    def members(self) -> list[dict[str, Any]]:
        rows = []
        for member in self._require_data().get("members", []):
            user = member["user"]
            name = user.get("displayName") or user["username"]
            rows.append(
                {
                    "username": user["username"],
                    "name": name,
                    "image": user.get("image"),
                    "initials": get_initials(name),
                    "role": member["role"],
                    "joined": format_date(member["joinedAt"]),
                }
            )
        return rows
