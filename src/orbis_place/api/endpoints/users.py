# src/orbis_place/api/endpoints/users.py
"""User profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter, File, UploadFile

from orbis_place.api.dependencies import PrincipalDep, ProfileServiceDep
from orbis_place.core.settings import settings
from orbis_place.schemas.user import ProfileUpdateRequest, UserProfileView
from orbis_place.services.images import ImageUpload

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserProfileView, summary="Get current user profile")
async def get_me(principal: PrincipalDep, service: ProfileServiceDep) -> UserProfileView:
    """Return the caller's own profile, ignoring visibility flags."""
    return service.get_user_by_id(principal.user_id)


@router.patch("/me", response_model=UserProfileView, summary="Update current user profile")
async def update_me(
    payload: ProfileUpdateRequest,
    principal: PrincipalDep,
    service: ProfileServiceDep,
) -> UserProfileView:
    """Apply a partial update; fields missing from the body are left alone."""
    return service.update_profile(principal, payload)


@router.post("/me/image", response_model=UserProfileView, summary="Upload profile image")
async def upload_image(
    principal: PrincipalDep,
    service: ProfileServiceDep,
    image: UploadFile = File(..., description="PNG, JPEG, GIF or WebP image"),
) -> UserProfileView:
    """Replace the caller's profile image with the uploaded file."""
    # Never buffer more than one byte past the limit.
    data = await image.read(settings.max_image_bytes + 1)
    upload = ImageUpload(filename=image.filename, content_type=image.content_type, data=data)
    return service.upload_profile_image(principal, upload)


@router.delete("/me/image", response_model=UserProfileView, summary="Delete profile image")
async def delete_image(principal: PrincipalDep, service: ProfileServiceDep) -> UserProfileView:
    """Clear the caller's profile image. Safe to repeat."""
    return service.delete_profile_image(principal)


@router.get(
    "/username/{username}",
    response_model=UserProfileView,
    summary="Get a public profile by username",
)
async def get_user_by_username(username: str, service: ProfileServiceDep) -> UserProfileView:
    """Return the public profile with counts, badges, memberships and owned items."""
    return service.get_user_by_username(username)
