from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from schemas.common import ApiModel, ResultCode


class WeeklyStatsCreate(ApiModel):
    team_id: int = Field(ge=1)
    week: int = Field(ge=1, le=53)
    year: int = Field(ge=1900, le=2100)
    points: Decimal = Field(max_digits=10, decimal_places=2, description="Points are required")
    opponent_points: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2)
    result: Optional[ResultCode] = None


class WeeklyStatsResponse(ApiModel):
    id: int
    team_id: int
    week: int
    year: int
    points: Decimal
    opponent_points: Optional[Decimal] = None
    result: Optional[ResultCode] = None
    created_at: Optional[datetime] = None
