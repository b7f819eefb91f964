"""
Shared FastAPI dependencies for the route layer.
"""

from typing import Any

from fastapi import HTTPException, Request
from pydantic.alias_generators import to_snake

from services.storage import DatabaseStorage


def get_storage(request: Request) -> DatabaseStorage:
    """Return the storage service constructed at startup."""
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        raise HTTPException(status_code=503, detail="Storage not initialized")
    return storage


def bind_payload(payload: Any, **server_fields: Any) -> dict[str, Any]:
    """
    Merge server-derived fields (caller id, path ids) over a request body.

    ``server_fields`` use wire (camelCase) names. Any client value under
    either spelling of those keys is discarded. Non-object bodies raise
    ValueError.
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValueError("request body must be a JSON object")

    shadowed = set(server_fields) | {to_snake(key) for key in server_fields}
    body = {key: value for key, value in payload.items() if key not in shadowed}
    body.update(server_fields)
    return body
