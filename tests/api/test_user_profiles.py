# tests/api/test_user_profiles.py
"""Tests for the public and self-service user profile endpoints."""

from fastapi import status
from fastapi.testclient import TestClient

from orbis_place.core.settings import settings
from orbis_place.models import User


class TestPublicProfile:
    """GET /users/username/{username}."""

    def test_returns_aggregated_profile(self, client: TestClient, populated_profile: User) -> None:
        response = client.get("/users/username/jane")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["id"] == populated_profile.id
        assert data["username"] == "jane"
        assert data["displayName"] == "Jane Doe"
        assert data["role"] == "USER"
        assert data["reputation"] == 42
        assert data["createdAt"].startswith("2024-03-15T12:00:00")
        assert data["_count"] == {
            "followers": 1,
            "following": 0,
            "ownedResources": 3,
            "ownedServers": 1,
            "badges": 1,
        }

    def test_counts_match_collections_below_cap(
        self, client: TestClient, populated_profile: User
    ) -> None:
        data = client.get("/users/username/jane").json()

        assert data["_count"]["ownedResources"] == len(data["ownedResources"])
        assert data["_count"]["ownedServers"] == len(data["ownedServers"])

    def test_collections_are_capped_but_counts_are_not(
        self, client: TestClient, populated_profile: User, monkeypatch
    ) -> None:
        monkeypatch.setattr(settings, "profile_collection_limit", 2)

        data = client.get("/users/username/jane").json()

        assert data["_count"]["ownedResources"] == 3
        assert len(data["ownedResources"]) == 2
        # Newest first
        assert [r["slug"] for r in data["ownedResources"]] == ["jane-plugin-2", "jane-plugin-1"]

    def test_only_user_owned_items_are_listed(
        self, client: TestClient, populated_profile: User
    ) -> None:
        data = client.get("/users/username/jane").json()

        assert all(r["ownerType"] == "USER" for r in data["ownedResources"])
        assert "team-plugin" not in {r["slug"] for r in data["ownedResources"]}
        assert [s["slug"] for s in data["ownedServers"]] == ["janes-realm"]
        server = data["ownedServers"][0]
        assert server["serverIp"] == "play.jane.example"
        assert server["isOnline"] is True
        assert server["currentPlayers"] <= server["maxPlayers"]

    def test_embeds_badges_and_memberships(
        self, client: TestClient, populated_profile: User
    ) -> None:
        data = client.get("/users/username/jane").json()

        assert len(data["userBadges"]) == 1
        award = data["userBadges"][0]
        assert award["badge"]["slug"] == "early-adopter"
        assert award["badge"]["rarity"] == "RARE"
        assert award["awardedAt"].startswith("2024-04-01")

        assert len(data["teamMemberships"]) == 1
        membership = data["teamMemberships"][0]
        assert membership["role"] == "OWNER"
        assert membership["team"]["name"] == "builders"
        assert membership["team"]["displayName"] == "The Builders"

    def test_unknown_username_is_404(self, client: TestClient, test_user: User) -> None:
        response = client.get("/users/username/nobody")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"detail": "User not found"}

    def test_username_match_is_case_sensitive(self, client: TestClient, test_user: User) -> None:
        response = client.get("/users/username/Jane")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_visibility_flags_hide_fields(
        self, client: TestClient, test_user: User, db_session
    ) -> None:
        test_user.show_location = False
        test_user.show_online_status = False
        db_session.commit()

        data = client.get("/users/username/jane").json()

        assert data["location"] is None
        assert data["lastActiveAt"] is None
        assert data["email"] is None
        assert data["showLocation"] is False

    def test_email_is_public_when_opted_in(
        self, client: TestClient, test_user: User, db_session
    ) -> None:
        test_user.show_email = True
        db_session.commit()

        data = client.get("/users/username/jane").json()
        assert data["email"] == "jane@example.com"
        assert data["location"] == "Lisbon"
        assert data["lastActiveAt"].startswith("2025-01-10")

    def test_user_without_relations(self, client: TestClient, other_user: User) -> None:
        data = client.get("/users/username/bob").json()

        assert data["displayName"] is None
        assert data["_count"] == {
            "followers": 0,
            "following": 0,
            "ownedResources": 0,
            "ownedServers": 0,
            "badges": 0,
        }
        assert data["userBadges"] == []
        assert data["teamMemberships"] == []
        assert data["ownedResources"] == []
        assert data["ownedServers"] == []


class TestCurrentUser:
    """GET /users/me."""

    def test_get_me(self, client: TestClient, test_user: User, auth_token: dict[str, str]) -> None:
        response = client.get("/users/me", headers=auth_token)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["id"] == test_user.id
        assert data["username"] == "jane"

    def test_get_me_ignores_visibility_flags(
        self, client: TestClient, test_user: User, auth_token: dict[str, str], db_session
    ) -> None:
        test_user.show_location = False
        db_session.commit()

        data = client.get("/users/me", headers=auth_token).json()
        assert data["email"] == "jane@example.com"
        assert data["location"] == "Lisbon"

    def test_get_me_unauthorized(self, client: TestClient) -> None:
        response = client.get("/users/me")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.headers["www-authenticate"] == "Bearer"

    def test_get_me_invalid_token(self, client: TestClient, test_user: User) -> None:
        response = client.get("/users/me", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_get_me_with_session_cookie(self, client: TestClient, test_user: User) -> None:
        from orbis_place.core.security import create_session_token

        token = create_session_token(test_user.id)
        response = client.get(
            "/users/me", headers={"Cookie": f"{settings.session_cookie_name}={token}"}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["username"] == "jane"
