# src/orbis_place/services/profile.py
"""Profile aggregation and self-service profile mutations."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any, assert_never

from pydantic import ValidationError
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, selectinload

from orbis_place.core.errors import NotFoundError, ProfileValidationError, UpstreamFailure
from orbis_place.core.security import Principal
from orbis_place.core.settings import settings
from orbis_place.models import (
    Follow,
    Owner,
    OwnerType,
    Resource,
    Server,
    Team,
    TeamMember,
    User,
    UserBadge,
)
from orbis_place.schemas.team import TeamProfileView
from orbis_place.schemas.user import ProfileUpdateRequest, UserProfileView
from orbis_place.services.images import ImageUpload, validate_image
from orbis_place.services.storage import ObjectStorage, get_storage

logger = logging.getLogger(__name__)


def _user_summary(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "username": user.username,
        "display_name": user.display_name,
        "image": user.image,
    }


class ProfileService:
    """Assembles user/team view objects and applies profile changes.

    Every read returns a fully built view object; nothing lazy escapes the
    session. Mutations take the acting ``Principal`` explicitly.
    """

    def __init__(self, db: Session, storage: ObjectStorage | None = None) -> None:
        self.db = db
        self.storage = storage if storage is not None else get_storage()

    @contextmanager
    def _database(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as err:
            self.db.rollback()
            raise UpstreamFailure(f"Database error while {action}") from err

    # Reads -----------------------------------------------------------------

    def get_user_by_id(self, user_id: str) -> UserProfileView:
        """Return the unfiltered profile of ``user_id`` (the owner's own view)."""
        with self._database("loading user"):
            user = self.db.get(User, user_id)
            if user is None:
                raise NotFoundError.for_entity("User")
            return self._build_user_view(user, public=False)

    def get_user_by_username(self, username: str) -> UserProfileView:
        """Return the public profile for an exact, case-sensitive username."""
        logger.debug("Loading public profile for %s", username)
        with self._database("loading user"):
            user = self.db.query(User).filter(User.username == username).first()
            if user is None:
                raise NotFoundError.for_entity("User")
            return self._build_user_view(user, public=True)

    def get_team_by_name(self, name: str) -> TeamProfileView:
        """Return the public profile for a team, including every member."""
        logger.debug("Loading team profile for %s", name)
        with self._database("loading team"):
            team = (
                self.db.query(Team)
                .options(
                    selectinload(Team.owner),
                    selectinload(Team.members).selectinload(TeamMember.user),
                )
                .filter(Team.name == name)
                .first()
            )
            if team is None:
                raise NotFoundError.for_entity("Team")
            return self._build_team_view(team)

    # Mutations -------------------------------------------------------------

    def update_profile(
        self,
        principal: Principal,
        patch: ProfileUpdateRequest | Mapping[str, Any],
    ) -> UserProfileView:
        """Apply the fields present in ``patch`` to the principal's profile.

        Raises:
            ProfileValidationError: If a field violates its constraints.
            NotFoundError: If the principal no longer exists.
        """
        if not isinstance(patch, ProfileUpdateRequest):
            try:
                patch = ProfileUpdateRequest.model_validate(patch)
            except ValidationError as err:
                first = err.errors()[0]
                field = ".".join(str(part) for part in first["loc"]) or "profile"
                raise ProfileValidationError(f"{field}: {first['msg']}") from err

        changes = patch.changes()
        with self._database("updating profile"):
            user = self._require_user(principal)
            if changes:
                for key, value in changes.items():
                    setattr(user, key, value)
                self.db.commit()
                self.db.refresh(user)
                logger.info("Updated profile of %s: %s", user.id, ", ".join(sorted(changes)))
            return self._build_user_view(user, public=False)

    def upload_profile_image(self, principal: Principal, upload: ImageUpload) -> UserProfileView:
        """Store ``upload`` and make it the principal's profile image.

        Raises:
            ProfileValidationError: If the payload is empty or too large.
            UnsupportedMediaError: If the payload is not an accepted image.
        """
        content_type, extension = validate_image(upload)
        with self._database("loading user"):
            user = self._require_user(principal)

        key = f"avatars/{user.id}/{uuid.uuid4().hex}{extension}"
        new_url = self.storage.put(key, upload.data, content_type)
        previous = user.image

        try:
            with self._database("replacing profile image"):
                user.image = new_url
                self.db.commit()
                self.db.refresh(user)
        except UpstreamFailure:
            self._discard(new_url)
            raise

        logger.info("Replaced profile image of %s", user.id)
        if previous:
            self._discard(previous)
        with self._database("loading user"):
            return self._build_user_view(user, public=False)

    def delete_profile_image(self, principal: Principal) -> UserProfileView:
        """Clear the principal's profile image; a no-op if none is set."""
        with self._database("clearing profile image"):
            user = self._require_user(principal)
            previous = user.image
            if previous is None:
                logger.debug("Profile image of %s already cleared", user.id)
                return self._build_user_view(user, public=False)
            user.image = None
            self.db.commit()
            self.db.refresh(user)

        logger.info("Cleared profile image of %s", user.id)
        self._discard(previous)
        with self._database("loading user"):
            return self._build_user_view(user, public=False)

    # Helpers ---------------------------------------------------------------

    def _require_user(self, principal: Principal) -> User:
        user = self.db.get(User, principal.user_id)
        if user is None:
            raise NotFoundError.for_entity("User")
        return user

    def _discard(self, url: str) -> None:
        if not self.storage.owns(url):
            return
        try:
            self.storage.delete(url)
        except UpstreamFailure as err:
            logger.warning("Could not remove stored image %s: %s", url, err.__cause__ or err)

    def _owned(self, model: type[Resource] | type[Server], owner: Owner) -> Query[Any]:
        match owner.owner_type:
            case OwnerType.USER | OwnerType.TEAM:
                return self.db.query(model).filter(
                    model.owner_type == owner.owner_type,
                    model.owner_id == owner.owner_id,
                )
            case _:
                assert_never(owner.owner_type)

    def _owned_collections(self, owner: Owner) -> dict[str, Any]:
        limit = settings.profile_collection_limit
        resources = self._owned(Resource, owner)
        servers = self._owned(Server, owner)
        return {
            "owned_resources_count": resources.count(),
            "owned_servers_count": servers.count(),
            "owned_resources": resources.order_by(
                Resource.created_at.desc(), Resource.id
            ).limit(limit).all(),
            "owned_servers": servers.order_by(Server.created_at.desc(), Server.id).limit(limit).all(),
        }

    def _build_user_view(self, user: User, *, public: bool) -> UserProfileView:
        followers = (
            self.db.query(func.count())
            .select_from(Follow)
            .filter(Follow.following_id == user.id)
            .scalar()
            or 0
        )
        following = (
            self.db.query(func.count())
            .select_from(Follow)
            .filter(Follow.follower_id == user.id)
            .scalar()
            or 0
        )
        awarded = self.db.query(UserBadge).filter(UserBadge.user_id == user.id)
        badges = (
            awarded.order_by(UserBadge.awarded_at.desc(), UserBadge.id)
            .limit(settings.profile_badge_limit)
            .all()
        )
        memberships = (
            self.db.query(TeamMember)
            .options(selectinload(TeamMember.team))
            .filter(TeamMember.user_id == user.id)
            .order_by(TeamMember.joined_at, TeamMember.id)
            .all()
        )
        owned = self._owned_collections(Owner.user(user.id))

        show_email = user.show_email or not public
        show_location = user.show_location or not public
        show_activity = user.show_online_status or not public

        return UserProfileView.model_validate(
            {
                "id": user.id,
                "username": user.username,
                "email": user.email if show_email else None,
                "display_name": user.display_name,
                "image": user.image,
                "banner": user.banner,
                "bio": user.bio,
                "location": user.location if show_location else None,
                "website": user.website,
                "role": user.role,
                "status": user.status,
                "reputation": user.reputation,
                "show_email": user.show_email,
                "show_location": user.show_location,
                "show_online_status": user.show_online_status,
                "created_at": user.created_at,
                "last_active_at": user.last_active_at if show_activity else None,
                "count": {
                    "followers": followers,
                    "following": following,
                    "owned_resources": owned["owned_resources_count"],
                    "owned_servers": owned["owned_servers_count"],
                    "badges": awarded.count(),
                },
                "user_badges": badges,
                "team_memberships": memberships,
                "owned_resources": owned["owned_resources"],
                "owned_servers": owned["owned_servers"],
            }
        )

    def _build_team_view(self, team: Team) -> TeamProfileView:
        owned = self._owned_collections(Owner.team(team.id))
        members = [
            {
                "id": member.id,
                "role": member.role,
                "joined_at": member.joined_at,
                **{key: value for key, value in _user_summary(member.user).items() if key != "id"},
                "user": _user_summary(member.user),
            }
            for member in team.members
        ]
        return TeamProfileView.model_validate(
            {
                "id": team.id,
                "name": team.name,
                "display_name": team.display_name,
                "description": team.description,
                "logo": team.logo,
                "banner": team.banner,
                "website": team.website,
                "discord_url": team.discord_url,
                "created_at": team.created_at,
                "updated_at": team.updated_at,
                "owner_id": team.owner_id,
                "owner": _user_summary(team.owner),
                "members": members,
                "count": {
                    "members": len(members),
                    "owned_resources": owned["owned_resources_count"],
                    "owned_servers": owned["owned_servers_count"],
                },
                "owned_resources": owned["owned_resources"],
                "owned_servers": owned["owned_servers"],
            }
        )
