import json
from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator

from schemas.common import ApiModel


class LeagueCreate(ApiModel):
    name: str = Field(min_length=1, max_length=255, description="League name is required")
    platform: str = Field(min_length=1, max_length=50, description="Platform is required")
    sport: str = Field(min_length=1, max_length=50, description="Sport is required")
    season: str = Field(min_length=1, max_length=10, description="Season is required")
    league_id: str = Field(min_length=1, max_length=255, description="League ID is required")
    settings: Optional[dict[str, Any]] = None


class LeagueResponse(ApiModel):
    id: int
    name: str
    platform: str
    sport: str
    season: str
    league_id: str
    settings: Optional[dict[str, Any]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("settings", mode="before")
    @classmethod
    def decode_settings(cls, v: Any) -> Any:
        """Settings are stored as a JSON string."""
        if isinstance(v, str):
            return json.loads(v) if v else None
        return v
