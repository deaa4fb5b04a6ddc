# src/orbis_place/services/__init__.py
"""Business logic services for the Orbis Place application."""

from .images import ImageUpload
from .profile import ProfileService
from .storage import LocalObjectStorage, ObjectStorage

__all__ = [
    "ImageUpload",
    "ProfileService",
    "LocalObjectStorage",
    "ObjectStorage",
]
