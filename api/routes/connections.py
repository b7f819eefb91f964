"""
Platform Connection API Routes

Links between the caller and external fantasy platforms. Connections
are soft-deactivated, never deleted; token values are write-only.
"""

import asyncio
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from api.dependencies import bind_payload, get_storage
from core.auth import require_user
from core.logging import get_logger
from db.models import PlatformConnection
from schemas.connections import (
    PlatformConnectionCreate,
    PlatformConnectionResponse,
    PlatformConnectionUpdate,
)
from services.storage import DatabaseStorage

router = APIRouter(prefix="/connections", tags=["connections"])
log = get_logger("connections_api")


async def _require_own_connection(
    storage: DatabaseStorage, connection_id: int, user_id: str, failure_message: str
) -> PlatformConnection:
    try:
        connection = await asyncio.to_thread(storage.get_platform_connection, connection_id)
    except Exception:
        log.exception("fetch_platform_connection_failed", connection_id=connection_id)
        raise HTTPException(status_code=500, detail=failure_message)
    if connection is None or connection.user_id != user_id:
        raise HTTPException(status_code=404, detail="Platform connection not found")
    return connection


@router.get("", response_model=list[PlatformConnectionResponse])
async def list_connections(
    user_id: str = Depends(require_user),
    storage: DatabaseStorage = Depends(get_storage),
) -> list[PlatformConnectionResponse]:
    """Caller's active connections, newest first."""
    try:
        connections = await asyncio.to_thread(storage.get_user_platform_connections, user_id)
    except Exception:
        log.exception("fetch_platform_connections_failed", user_id=user_id)
        raise HTTPException(status_code=500, detail="Failed to fetch platform connections")
    return [PlatformConnectionResponse.from_model(c) for c in connections]


@router.post("", response_model=PlatformConnectionResponse)
async def create_connection(
    payload: Any = Body(None),
    user_id: str = Depends(require_user),
    storage: DatabaseStorage = Depends(get_storage),
) -> PlatformConnectionResponse:
    try:
        data = PlatformConnectionCreate.model_validate(bind_payload(payload, userId=user_id))
        connection = await asyncio.to_thread(storage.create_platform_connection, data)
    except Exception as e:
        log.warning("create_platform_connection_failed", user_id=user_id, error=str(e))
        raise HTTPException(status_code=400, detail="Failed to create platform connection")
    return PlatformConnectionResponse.from_model(connection)


@router.patch("/{connection_id}", response_model=PlatformConnectionResponse)
async def update_connection(
    connection_id: int,
    payload: Any = Body(None),
    user_id: str = Depends(require_user),
    storage: DatabaseStorage = Depends(get_storage),
) -> PlatformConnectionResponse:
    """Partial update, e.g. storing refreshed tokens."""
    await _require_own_connection(
        storage, connection_id, user_id, "Failed to update platform connection"
    )
    try:
        updates = PlatformConnectionUpdate.model_validate(bind_payload(payload))
        connection = await asyncio.to_thread(
            storage.update_platform_connection, connection_id, updates
        )
    except Exception as e:
        log.warning("update_platform_connection_failed", connection_id=connection_id, error=str(e))
        raise HTTPException(status_code=400, detail="Failed to update platform connection")
    if connection is None:
        raise HTTPException(status_code=404, detail="Platform connection not found")
    return PlatformConnectionResponse.from_model(connection)


@router.delete("/{connection_id}", response_model=PlatformConnectionResponse)
async def deactivate_connection(
    connection_id: int,
    user_id: str = Depends(require_user),
    storage: DatabaseStorage = Depends(get_storage),
) -> PlatformConnectionResponse:
    """Soft-deactivate: the row stays, but drops out of the active listing."""
    await _require_own_connection(
        storage, connection_id, user_id, "Failed to deactivate platform connection"
    )
    try:
        connection = await asyncio.to_thread(
            storage.deactivate_platform_connection, connection_id
        )
    except Exception:
        log.exception("deactivate_platform_connection_failed", connection_id=connection_id)
        raise HTTPException(status_code=500, detail="Failed to deactivate platform connection")
    if connection is None:
        raise HTTPException(status_code=404, detail="Platform connection not found")
    return PlatformConnectionResponse.from_model(connection)
