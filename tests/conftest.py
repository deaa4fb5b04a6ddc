# tests/conftest.py
from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator
from datetime import UTC, datetime
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="orbis-uploads-"))

from orbis_place.api.dependencies import get_storage_dep
from orbis_place.core.security import create_session_token
from orbis_place.db.session import Base
from orbis_place.db.session import get_db as app_get_session
from orbis_place.main import app as fastapi_app
from orbis_place.models import (
    Badge,
    Follow,
    Owner,
    Resource,
    Server,
    Team,
    TeamMember,
    TeamRole,
    User,
    UserBadge,
)
from orbis_place.services.storage import LocalObjectStorage

TEST_DB_URL = "sqlite://"

# Smallest payloads that pass the magic-byte check for each format.
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 32
GIF_BYTES = b"GIF89a" + b"\x00" * 32
WEBP_BYTES = b"RIFF\x24\x00\x00\x00WEBPVP8 " + b"\x00" * 24


def at(year: int, month: int, day: int = 1) -> datetime:
    return datetime(year, month, day, 12, 0, tzinfo=UTC)


@pytest.fixture()
def engine() -> Iterator[Engine]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def storage(tmp_path: Path) -> LocalObjectStorage:
    return LocalObjectStorage(tmp_path / "media", "/media")


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    db_session: Session,
    storage: LocalObjectStorage,
) -> Iterator[None]:
    def _get_session_override() -> Iterator[Session]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_storage_dep] = lambda: storage
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(get_storage_dep, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """Create and return the primary test user."""
    user = User(
        username="jane",
        email="jane@example.com",
        display_name="Jane Doe",
        bio="Builds minigames.",
        location="Lisbon",
        website="https://jane.example.com",
        reputation=42,
        show_email=False,
        show_location=True,
        show_online_status=True,
        created_at=at(2024, 3, 15),
        last_active_at=at(2025, 1, 10),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Create and return a second user with no display name."""
    user = User(username="bob", email="bob@example.com", created_at=at(2023, 7, 2))
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    token = create_session_token(test_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def team(db_session: Session, test_user: User, other_user: User) -> Team:
    """A team owned by the primary user with the second user as member."""
    team = Team(
        name="builders",
        display_name="The Builders",
        description="We build things.",
        website="https://builders.example.com",
        owner_id=test_user.id,
        created_at=at(2024, 5, 1),
    )
    db_session.add(team)
    db_session.flush()
    db_session.add_all(
        [
            TeamMember(
                team_id=team.id, user_id=test_user.id, role=TeamRole.OWNER, joined_at=at(2024, 5, 1)
            ),
            TeamMember(
                team_id=team.id, user_id=other_user.id, role=TeamRole.MEMBER, joined_at=at(2024, 6, 1)
            ),
        ]
    )
    db_session.commit()
    db_session.refresh(team)
    return team


@pytest.fixture()
def populated_profile(db_session: Session, test_user: User, other_user: User, team: Team) -> User:
    """Give the primary user followers, a badge, resources and servers."""
    db_session.add(Follow(follower_id=other_user.id, following_id=test_user.id))

    badge = Badge(name="Early Adopter", slug="early-adopter", rarity="RARE")
    db_session.add(badge)
    db_session.flush()
    db_session.add(UserBadge(user_id=test_user.id, badge_id=badge.id, awarded_at=at(2024, 4, 1)))

    for index in range(3):
        db_session.add(
            Resource(
                slug=f"jane-plugin-{index}",
                name=f"Plugin {index}",
                tagline="Useful",
                status="PUBLISHED",
                download_count=10 * index,
                like_count=index,
                owner=Owner.user(test_user.id),
                created_at=at(2024, 1 + index),
                updated_at=at(2024, 1 + index),
            )
        )
    db_session.add(
        Resource(
            slug="team-plugin",
            name="Team Plugin",
            status="PUBLISHED",
            owner=Owner.team(team.id),
        )
    )
    db_session.add_all(
        [
            Server(
                name="Jane's Realm",
                slug="janes-realm",
                server_ip="play.jane.example",
                is_online=True,
                current_players=5,
                max_players=20,
                owner=Owner.user(test_user.id),
            ),
            Server(
                name="Builders Hub",
                slug="builders-hub",
                server_ip="play.builders.example",
                current_players=0,
                max_players=50,
                owner=Owner.team(team.id),
            ),
        ]
    )
    db_session.commit()
    return test_user
