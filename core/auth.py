"""
Session authentication.

Resolves the caller's identity from the session cookie written by the
external login flow. The user row is created on first sight, and kept in
step with the session claims afterwards, so foreign keys from teams,
chat and platform connections always resolve.
"""

import asyncio
from typing import Any

from fastapi import Depends, HTTPException, Request
from peewee import IntegrityError
from pydantic import ValidationError

from api.dependencies import get_storage
from core.logging import get_logger
from core.settings import settings
from schemas.users import UserUpsert
from services.storage import DatabaseStorage

log = get_logger("auth")


def _sync_user(storage: DatabaseStorage, claims: dict[str, Any]) -> str:
    identity = UserUpsert.from_claims(claims)
    current = storage.get_user(identity.id)
    if current is None:
        storage.upsert_user(identity)
        log.info("user_registered", user_id=identity.id)
    elif any(
        getattr(current, key) != value
        for key, value in identity.model_dump(exclude_unset=True).items()
    ):
        storage.upsert_user(identity)
        log.info("user_claims_updated", user_id=identity.id)
    return identity.id


async def require_user(
    request: Request,
    storage: DatabaseStorage = Depends(get_storage),
) -> str:
    """
    Return the authenticated caller's user id.

    Raises:
        HTTPException: 401 if the session cookie is missing, unknown or
            expired, or its claims cannot be stored as a user
    """
    sid = request.cookies.get(settings.session_cookie_name)
    if not sid:
        raise HTTPException(status_code=401, detail="Unauthorized")

    claims = await asyncio.to_thread(storage.resolve_session, sid)
    if claims is None:
        log.info("session_rejected", path=request.url.path)
        raise HTTPException(status_code=401, detail="Unauthorized")

    try:
        return await asyncio.to_thread(_sync_user, storage, claims)
    except (IntegrityError, ValidationError):
        log.exception("user_sync_failed", user_id=claims.get("sub"))
        raise HTTPException(status_code=401, detail="Unauthorized")
