# src/orbis_place/scripts/issue_token.py
"""Print a session token for an existing user.

Development stand-in for the external sign-in flow, e.g.::

    TOKEN=$(python -m orbis_place.scripts.issue_token jane)
    curl -H "Authorization: Bearer $TOKEN" localhost:8000/users/me
"""
from __future__ import annotations

import argparse
import sys

from orbis_place.core.security import create_session_token
from orbis_place.db.session import SessionLocal
from orbis_place.models import User


def issue_token(username: str) -> str | None:
    """Return a session token for ``username``, or None if there is no such user."""
    with SessionLocal() as db:
        user = db.query(User).filter(User.username == username).first()
        if user is None:
            return None
        return create_session_token(user.id)


def main() -> None:
    parser = argparse.ArgumentParser(description="Issue a development session token")
    parser.add_argument("username", help="Exact username of the account")
    args = parser.parse_args()

    token = issue_token(args.username)
    if token is None:
        print(f"No user named {args.username!r}", file=sys.stderr)
        sys.exit(1)
    print(token)


if __name__ == "__main__":
    main()
