"""
Fantasy Team API Routes

The caller's teams and the weekly stats recorded against any team.

Routes:
    GET   /api/teams             — caller's teams, newest first
    POST  /api/teams             — create a team owned by the caller
    PATCH /api/teams/{id}        — partial update of a caller-owned team
    GET   /api/teams/{id}/stats  — weekly stats by year, then week
    POST  /api/teams/{id}/stats  — record one week's stats
"""

import asyncio
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from api.dependencies import bind_payload, get_storage
from core.auth import require_user
from core.logging import get_logger
from db.models import FantasyTeam
from schemas.stats import WeeklyStatsCreate, WeeklyStatsResponse
from schemas.teams import FantasyTeamCreate, FantasyTeamResponse, FantasyTeamUpdate
from services.storage import DatabaseStorage

router = APIRouter(prefix="/teams", tags=["teams"])
log = get_logger("teams_api")


async def _require_team(
    storage: DatabaseStorage, team_id: int, failure_message: str
) -> FantasyTeam:
    try:
        team = await asyncio.to_thread(storage.get_fantasy_team, team_id)
    except Exception:
        log.exception("fetch_team_failed", team_id=team_id)
        raise HTTPException(status_code=500, detail=failure_message)
    if team is None:
        raise HTTPException(status_code=404, detail="Team not found")
    return team


@router.get("", response_model=list[FantasyTeamResponse])
async def list_my_teams(
    user_id: str = Depends(require_user),
    storage: DatabaseStorage = Depends(get_storage),
) -> list[FantasyTeamResponse]:
    try:
        teams = await asyncio.to_thread(storage.get_user_fantasy_teams, user_id)
    except Exception:
        log.exception("fetch_teams_failed", user_id=user_id)
        raise HTTPException(status_code=500, detail="Failed to fetch teams")
    return [FantasyTeamResponse.model_validate(team) for team in teams]


@router.post("", response_model=FantasyTeamResponse)
async def create_team(
    payload: Any = Body(None),
    user_id: str = Depends(require_user),
    storage: DatabaseStorage = Depends(get_storage),
) -> FantasyTeamResponse:
    """Create a team bound to the caller; a userId in the body is ignored."""
    try:
        data = FantasyTeamCreate.model_validate(bind_payload(payload, userId=user_id))
        team = await asyncio.to_thread(storage.create_fantasy_team, data)
    except Exception as e:
        log.warning("create_team_failed", user_id=user_id, error=str(e))
        raise HTTPException(status_code=400, detail="Failed to create team")
    return FantasyTeamResponse.model_validate(team)


@router.patch("/{team_id}", response_model=FantasyTeamResponse)
async def update_team(
    team_id: int,
    payload: Any = Body(None),
    user_id: str = Depends(require_user),
    storage: DatabaseStorage = Depends(get_storage),
) -> FantasyTeamResponse:
    """Merge the supplied fields into a team the caller owns."""
    team = await _require_team(storage, team_id, "Failed to update team")
    if team.user_id != user_id:
        raise HTTPException(status_code=404, detail="Team not found")

    try:
        updates = FantasyTeamUpdate.model_validate(bind_payload(payload))
        team = await asyncio.to_thread(storage.update_fantasy_team, team_id, updates)
    except Exception as e:
        log.warning("update_team_failed", team_id=team_id, error=str(e))
        raise HTTPException(status_code=400, detail="Failed to update team")
    if team is None:
        raise HTTPException(status_code=404, detail="Team not found")
    return FantasyTeamResponse.model_validate(team)


@router.get("/{team_id}/stats", response_model=list[WeeklyStatsResponse])
async def list_team_stats(
    team_id: int,
    _: str = Depends(require_user),
    storage: DatabaseStorage = Depends(get_storage),
) -> list[WeeklyStatsResponse]:
    await _require_team(storage, team_id, "Failed to fetch team stats")
    try:
        stats = await asyncio.to_thread(storage.get_team_weekly_stats, team_id)
    except Exception:
        log.exception("fetch_team_stats_failed", team_id=team_id)
        raise HTTPException(status_code=500, detail="Failed to fetch team stats")
    return [WeeklyStatsResponse.model_validate(row) for row in stats]


@router.post("/{team_id}/stats", response_model=WeeklyStatsResponse)
async def create_team_stats(
    team_id: int,
    payload: Any = Body(None),
    _: str = Depends(require_user),
    storage: DatabaseStorage = Depends(get_storage),
) -> WeeklyStatsResponse:
    """Record one week's result. A second record for the same week is rejected."""
    await _require_team(storage, team_id, "Failed to create team stats")
    try:
        data = WeeklyStatsCreate.model_validate(bind_payload(payload, teamId=team_id))
        stats = await asyncio.to_thread(storage.create_weekly_stats, data)
    except Exception as e:
        log.warning("create_team_stats_failed", team_id=team_id, error=str(e))
        raise HTTPException(status_code=400, detail="Failed to create team stats")
    return WeeklyStatsResponse.model_validate(stats)
