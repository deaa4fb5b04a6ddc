"""Shared API dependencies for authentication and service wiring."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from orbis_place.core.errors import UnauthorizedError
from orbis_place.core.security import Principal, decode_session_token
from orbis_place.core.settings import settings
from orbis_place.db.session import get_db
from orbis_place.models import User
from orbis_place.services.profile import ProfileService
from orbis_place.services.storage import ObjectStorage, get_storage

# Missing credentials are reported by get_current_principal, not the scheme.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_storage_dep() -> ObjectStorage:
    """Get the object storage backend for dependency injection."""
    return get_storage()


StorageDep = Annotated[ObjectStorage, Depends(get_storage_dep)]


def get_current_principal(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> Principal:
    """Resolve the authenticated user from the bearer token or session cookie.

    Args:
        request: Incoming request, consulted for the session cookie
        credentials: HTTP Bearer credentials, if any were sent
        db: Database session

    Returns:
        Principal for the authenticated user

    Raises:
        UnauthorizedError: If no valid session is present or the user is gone
    """
    token = credentials.credentials if credentials else request.cookies.get(
        settings.session_cookie_name
    )
    if not token:
        raise UnauthorizedError()

    user_id = decode_session_token(token)
    if db.get(User, user_id) is None:
        raise UnauthorizedError("User not found")
    return Principal(user_id=user_id)


# Type alias for current principal dependency
PrincipalDep = Annotated[Principal, Depends(get_current_principal)]


def get_profile_service_dep(db: SessionDep, storage: StorageDep) -> ProfileService:
    """Get a ProfileService bound to the request's session."""
    return ProfileService(db, storage)


ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service_dep)]
