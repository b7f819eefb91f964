"""
League API Routes

Leagues plus the resources nested under a league (its teams and chat).
Every route requires an authenticated caller.

Routes:
    GET  /api/leagues               — all leagues, newest first
    POST /api/leagues               — create a league
    GET  /api/leagues/{id}          — one league
    GET  /api/leagues/{id}/teams    — league teams by standing
    GET  /api/leagues/{id}/chat     — recent chat, newest first
    POST /api/leagues/{id}/chat     — post a chat message as the caller
"""

import asyncio
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from api.dependencies import bind_payload, get_storage
from core.auth import require_user
from core.logging import get_logger
from db.models import League
from schemas.chat import ChatMessageCreate, ChatMessageResponse
from schemas.leagues import LeagueCreate, LeagueResponse
from schemas.teams import FantasyTeamResponse
from services.storage import DatabaseStorage

router = APIRouter(prefix="/leagues", tags=["leagues"])
log = get_logger("leagues_api")


async def _require_league(
    storage: DatabaseStorage, league_id: int, failure_message: str
) -> League:
    try:
        league = await asyncio.to_thread(storage.get_league, league_id)
    except Exception:
        log.exception("fetch_league_failed", league_id=league_id)
        raise HTTPException(status_code=500, detail=failure_message)
    if league is None:
        raise HTTPException(status_code=404, detail="League not found")
    return league


@router.get("", response_model=list[LeagueResponse])
async def list_leagues(
    _: str = Depends(require_user),
    storage: DatabaseStorage = Depends(get_storage),
) -> list[LeagueResponse]:
    try:
        leagues = await asyncio.to_thread(storage.get_leagues)
    except Exception:
        log.exception("fetch_leagues_failed")
        raise HTTPException(status_code=500, detail="Failed to fetch leagues")
    return [LeagueResponse.model_validate(league) for league in leagues]


@router.post("", response_model=LeagueResponse)
async def create_league(
    payload: Any = Body(None),
    user_id: str = Depends(require_user),
    storage: DatabaseStorage = Depends(get_storage),
) -> LeagueResponse:
    """Create a league from a validated payload; server-managed fields are ignored."""
    try:
        data = LeagueCreate.model_validate(bind_payload(payload))
        league = await asyncio.to_thread(storage.create_league, data)
    except Exception as e:
        log.warning("create_league_failed", user_id=user_id, error=str(e))
        raise HTTPException(status_code=400, detail="Failed to create league")
    return LeagueResponse.model_validate(league)


@router.get("/{league_id}", response_model=LeagueResponse)
async def get_league(
    league_id: int,
    _: str = Depends(require_user),
    storage: DatabaseStorage = Depends(get_storage),
) -> LeagueResponse:
    league = await _require_league(storage, league_id, "Failed to fetch league")
    return LeagueResponse.model_validate(league)


@router.get("/{league_id}/teams", response_model=list[FantasyTeamResponse])
async def list_league_teams(
    league_id: int,
    _: str = Depends(require_user),
    storage: DatabaseStorage = Depends(get_storage),
) -> list[FantasyTeamResponse]:
    """Teams in the league ordered by standing ascending."""
    await _require_league(storage, league_id, "Failed to fetch league teams")
    try:
        teams = await asyncio.to_thread(storage.get_teams_by_league, league_id)
    except Exception:
        log.exception("fetch_league_teams_failed", league_id=league_id)
        raise HTTPException(status_code=500, detail="Failed to fetch league teams")
    return [FantasyTeamResponse.model_validate(team) for team in teams]


@router.get("/{league_id}/chat", response_model=list[ChatMessageResponse])
async def list_chat_messages(
    league_id: int,
    limit: Optional[int] = Query(None, ge=1, le=200, description="Maximum messages to return (default 50)"),
    _: str = Depends(require_user),
    storage: DatabaseStorage = Depends(get_storage),
) -> list[ChatMessageResponse]:
    await _require_league(storage, league_id, "Failed to fetch chat messages")
    try:
        messages = await asyncio.to_thread(
            storage.get_league_chat_messages, league_id, limit
        )
    except Exception:
        log.exception("fetch_chat_messages_failed", league_id=league_id)
        raise HTTPException(status_code=500, detail="Failed to fetch chat messages")
    return [ChatMessageResponse.model_validate(message) for message in messages]


@router.post("/{league_id}/chat", response_model=ChatMessageResponse)
async def create_chat_message(
    league_id: int,
    payload: Any = Body(None),
    user_id: str = Depends(require_user),
    storage: DatabaseStorage = Depends(get_storage),
) -> ChatMessageResponse:
    """Post a message to the league chat as the caller."""
    await _require_league(storage, league_id, "Failed to create chat message")
    try:
        data = ChatMessageCreate.model_validate(
            bind_payload(payload, leagueId=league_id, userId=user_id)
        )
        message = await asyncio.to_thread(storage.create_chat_message, data)
    except Exception as e:
        log.warning("create_chat_message_failed", league_id=league_id, error=str(e))
        raise HTTPException(status_code=400, detail="Failed to create chat message")
    return ChatMessageResponse.model_validate(message)
