from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from schemas.common import ApiModel, reject_explicit_null


class PlatformConnectionCreate(ApiModel):
    user_id: str = Field(min_length=1)
    platform: str = Field(min_length=1, max_length=50, description="Platform is required")
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_at: Optional[datetime] = None
    is_active: bool = True


class PlatformConnectionUpdate(ApiModel):
    """Partial update, typically a token refresh."""
    platform: Optional[str] = Field(default=None, min_length=1, max_length=50)
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_at: Optional[datetime] = None
    is_active: Optional[bool] = None

    @field_validator("platform", "is_active")
    @classmethod
    def not_null(cls, v):
        return reject_explicit_null(v)


class PlatformConnectionResponse(ApiModel):
    """Tokens never leave the server; only their presence is reported."""
    id: int
    user_id: str
    platform: str
    expires_at: Optional[datetime] = None
    is_active: bool = True
    has_access_token: bool = False
    has_refresh_token: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, connection) -> "PlatformConnectionResponse":
        return cls(
            id=connection.id,
            user_id=connection.user_id,
            platform=connection.platform,
            expires_at=connection.expires_at,
            is_active=connection.is_active,
            has_access_token=bool(connection.access_token),
            has_refresh_token=bool(connection.refresh_token),
            created_at=connection.created_at,
            updated_at=connection.updated_at,
        )
