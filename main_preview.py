"""
Fantasy Sports Hub — Preview Interface

Standalone app for local UI previews. No database and no auth: the
identity route always reports "not authenticated" and the collection
routes return empty lists.

Usage:
    uvicorn main_preview:app --port 3000
"""

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from schemas.common import error_response

app = FastAPI(
    title="Fantasy Sports Hub (preview)",
    description="Empty-data preview of the dashboard API",
    version="1.0.0",
    docs_url=None,
    redoc_url=None,
)


@app.get("/api/auth/user")
async def preview_user():
    return JSONResponse(status_code=401, content=error_response("Not authenticated"))


@app.get("/api/teams")
async def preview_teams() -> list:
    return []


@app.get("/api/leagues")
async def preview_leagues() -> list:
    return []
