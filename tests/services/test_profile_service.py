# tests/services/test_profile_service.py
"""Direct tests for ProfileService outside the HTTP layer."""

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from orbis_place.api.dependencies import get_profile_service_dep
from orbis_place.core.errors import (
    NotFoundError,
    ProfileValidationError,
    UnsupportedMediaError,
    UpstreamFailure,
)
from orbis_place.core.security import Principal
from orbis_place.models import User
from orbis_place.services.images import ImageUpload
from orbis_place.services.profile import ProfileService
from orbis_place.services.storage import LocalObjectStorage
from tests.conftest import PNG_BYTES


def _broken_session() -> MagicMock:
    db = MagicMock(spec=Session)
    error = OperationalError("SELECT 1", {}, Exception("database is locked"))
    db.query.side_effect = error
    db.get.side_effect = error
    return db


class TestReads:
    def test_get_user_by_id(self, db_session: Session, test_user: User, storage) -> None:
        view = ProfileService(db_session, storage).get_user_by_id(test_user.id)

        assert view.username == "jane"
        assert view.email == "jane@example.com"

    def test_get_user_by_id_unknown(self, db_session: Session, storage) -> None:
        with pytest.raises(NotFoundError):
            ProfileService(db_session, storage).get_user_by_id("missing")

    def test_serializes_with_wire_names(self, db_session: Session, populated_profile: User, storage) -> None:
        view = ProfileService(db_session, storage).get_user_by_username("jane")
        payload = view.model_dump(by_alias=True, mode="json")

        assert set(payload["_count"]) == {
            "followers",
            "following",
            "ownedResources",
            "ownedServers",
            "badges",
        }
        assert "displayName" in payload
        assert "lastActiveAt" in payload

    def test_get_team_unknown(self, db_session: Session, storage) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            ProfileService(db_session, storage).get_team_by_name("ghosts")
        assert exc_info.value.detail == "Team not found"


class TestUpdates:
    def test_update_from_mapping(self, db_session: Session, test_user: User, storage) -> None:
        service = ProfileService(db_session, storage)

        view = service.update_profile(Principal(test_user.id), {"showEmail": True})

        assert view.show_email is True
        assert view.display_name == "Jane Doe"

    def test_update_from_invalid_mapping(self, db_session: Session, test_user: User, storage) -> None:
        service = ProfileService(db_session, storage)

        with pytest.raises(ProfileValidationError) as exc_info:
            service.update_profile(Principal(test_user.id), {"bio": "x" * 501})
        assert exc_info.value.detail.startswith("bio:")

    def test_update_unknown_principal(self, db_session: Session, storage) -> None:
        with pytest.raises(NotFoundError):
            ProfileService(db_session, storage).update_profile(Principal("gone"), {})

    def test_upload_rejects_non_image(self, db_session: Session, test_user: User, storage) -> None:
        upload = ImageUpload(filename="x.pdf", content_type="application/pdf", data=b"%PDF-1.7")

        with pytest.raises(UnsupportedMediaError):
            ProfileService(db_session, storage).upload_profile_image(Principal(test_user.id), upload)

    def test_failed_cleanup_does_not_fail_upload(
        self, db_session: Session, test_user: User, storage: LocalObjectStorage, caplog
    ) -> None:
        service = ProfileService(db_session, storage)
        principal = Principal(test_user.id)
        upload = ImageUpload(filename="a.png", content_type="image/png", data=PNG_BYTES)
        service.upload_profile_image(principal, upload)

        def _fail(url: str) -> None:
            raise UpstreamFailure(f"cannot delete {url}")

        storage.delete = _fail  # type: ignore[method-assign]
        view = service.upload_profile_image(principal, upload)

        assert view.image is not None
        assert "Could not remove stored image" in caplog.text


class TestUpstreamFailures:
    def test_database_error_becomes_upstream_failure(self, storage) -> None:
        db = _broken_session()

        with pytest.raises(UpstreamFailure) as exc_info:
            ProfileService(db, storage).get_user_by_username("jane")

        assert isinstance(exc_info.value.__cause__, OperationalError)
        db.rollback.assert_called_once()

    def test_upstream_failure_is_opaque_500(self, app: FastAPI, client: TestClient, storage) -> None:
        app.dependency_overrides[get_profile_service_dep] = lambda: ProfileService(
            _broken_session(), storage
        )
        try:
            response = client.get("/users/username/jane")
        finally:
            app.dependency_overrides.pop(get_profile_service_dep, None)

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}
