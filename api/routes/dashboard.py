"""
Dashboard API

GET /api/dashboard — the caller's teams with display fields plus the
summary counters shown at the top of the dashboard.
"""

import asyncio

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_storage
from core.auth import require_user
from core.logging import get_logger
from schemas.dashboard import DashboardResponse
from services.dashboard_service import build_dashboard
from services.storage import DatabaseStorage

router = APIRouter(prefix="/dashboard", tags=["dashboard"])
log = get_logger("dashboard_api")


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    user_id: str = Depends(require_user),
    storage: DatabaseStorage = Depends(get_storage),
) -> DashboardResponse:
    try:
        teams = await asyncio.to_thread(storage.get_user_fantasy_teams, user_id)
        leagues = await asyncio.to_thread(storage.get_leagues)
        return build_dashboard(teams, leagues)
    except Exception:
        log.exception("build_dashboard_failed", user_id=user_id)
        raise HTTPException(status_code=500, detail="Failed to build dashboard")
