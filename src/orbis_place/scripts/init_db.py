# src/orbis_place/scripts/init_db.py
"""Create the database tables and optionally load a small demo dataset."""
from __future__ import annotations

import argparse
from datetime import timedelta

from sqlalchemy.orm import Session

from orbis_place.db.session import SessionLocal, create_tables, drop_tables
from orbis_place.db.time import utcnow
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
    UserRole,
)


def seed_demo_data(db: Session) -> None:
    """Insert a demo user, team, badge, resource and server.

    Args:
        db: Database session
    """
    if db.query(User).filter(User.username == "jane").first() is not None:
        print("Demo data already present")
        return

    now = utcnow()
    jane = User(
        username="jane",
        email="jane@example.com",
        display_name="Jane Doe",
        bio="Builds minigames.",
        location="Lisbon",
        role=UserRole.MODERATOR,
        reputation=42,
        last_active_at=now,
    )
    bob = User(username="bob", email="bob@example.com", created_at=now - timedelta(days=400))
    db.add_all([jane, bob])
    db.flush()

    team = Team(name="builders", display_name="The Builders", owner_id=jane.id)
    db.add(team)
    db.flush()
    db.add_all(
        [
            TeamMember(team_id=team.id, user_id=jane.id, role=TeamRole.OWNER),
            TeamMember(team_id=team.id, user_id=bob.id, role=TeamRole.MEMBER),
            Follow(follower_id=bob.id, following_id=jane.id),
        ]
    )

    badge = Badge(name="Early Adopter", slug="early-adopter", rarity="RARE", color="#f5a623")
    db.add(badge)
    db.flush()
    db.add(UserBadge(user_id=jane.id, badge_id=badge.id))

    db.add(
        Resource(
            slug="skyblock-core",
            name="Skyblock Core",
            tagline="Island generation and progression",
            status="PUBLISHED",
            download_count=1200,
            like_count=87,
            owner=Owner.user(jane.id),
        )
    )
    db.add(
        Server(
            name="Builders Hub",
            slug="builders-hub",
            server_ip="play.builders.example",
            status="APPROVED",
            is_online=True,
            current_players=12,
            max_players=100,
            owner=Owner.team(team.id),
        )
    )
    db.commit()
    print("Seeded demo users 'jane' and 'bob' and team 'builders'")


def main() -> None:
    parser = argparse.ArgumentParser(description="Create database tables")
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop every table before creating them again.",
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Load a small demo dataset after creating the tables.",
    )
    args = parser.parse_args()

    if args.drop:
        drop_tables()
        print("Dropped all tables")
    create_tables()
    print("Database initialized.")

    if args.seed:
        with SessionLocal() as db:
            seed_demo_data(db)


if __name__ == "__main__":
    main()
