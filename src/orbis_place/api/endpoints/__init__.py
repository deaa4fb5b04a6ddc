# src/orbis_place/api/endpoints/__init__.py
"""API endpoint modules."""

from .teams import router as teams_router
from .users import router as users_router

__all__ = [
    "teams_router",
    "users_router",
]
