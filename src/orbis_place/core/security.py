"""Session token helpers.

Session issuance belongs to the external auth provider; the API only needs
to verify the signed token it hands out and recover the user id from it.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from orbis_place.core.errors import UnauthorizedError
from orbis_place.core.settings import settings


@dataclass(frozen=True)
class Principal:
    """The authenticated user on whose behalf a mutation runs."""

    user_id: str


def create_session_token(user_id: str) -> str:
    """Create a signed session token for ``user_id``."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode: dict[str, object] = {"sub": user_id, "exp": expire}
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_session_token(token: str) -> str:
    """Return the user id carried by ``token``.

    Raises:
        UnauthorizedError: If the token is malformed, expired or has no subject.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as err:
        raise UnauthorizedError() from err

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise UnauthorizedError()
    return subject
