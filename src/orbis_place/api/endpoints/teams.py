# src/orbis_place/api/endpoints/teams.py
"""Team profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from orbis_place.api.dependencies import ProfileServiceDep
from orbis_place.schemas.team import TeamProfileView

router = APIRouter(prefix="/teams", tags=["teams"])


@router.get("/{team_name}", response_model=TeamProfileView, summary="Get a team profile")
async def get_team(team_name: str, service: ProfileServiceDep) -> TeamProfileView:
    """Return the team with its owner and member list."""
    return service.get_team_by_name(team_name)
