"""
Auth API Routes

GET /api/auth/user — the signed-in user's profile.
"""

import asyncio

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_storage
from core.auth import require_user
from core.logging import get_logger
from schemas.users import UserResponse
from services.storage import DatabaseStorage

router = APIRouter(prefix="/auth", tags=["auth"])
log = get_logger("auth_api")


@router.get("/user", response_model=UserResponse)
async def get_current_user(
    user_id: str = Depends(require_user),
    storage: DatabaseStorage = Depends(get_storage),
) -> UserResponse:
    """Return the authenticated caller's identity record."""
    try:
        user = await asyncio.to_thread(storage.get_user, user_id)
    except Exception:
        log.exception("fetch_user_failed", user_id=user_id)
        raise HTTPException(status_code=500, detail="Failed to fetch user")

    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return UserResponse.model_validate(user)
