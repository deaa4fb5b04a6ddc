# src/orbis_place/api/__init__.py
"""HTTP API routers."""

from .endpoints import teams_router, users_router

__all__ = [
    "teams_router",
    "users_router",
]
