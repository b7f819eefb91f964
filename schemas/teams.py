from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator

from schemas.common import ApiModel, reject_explicit_null


class FantasyTeamCreate(ApiModel):
    user_id: str = Field(min_length=1)
    league_id: int = Field(ge=1)
    team_name: str = Field(min_length=1, max_length=255, description="Team name is required")
    team_id: str = Field(min_length=1, max_length=255, description="Team ID is required")
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    ties: int = Field(default=0, ge=0)
    points_for: Decimal = Field(default=Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    points_against: Decimal = Field(default=Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    standing: Optional[int] = Field(default=None, ge=1)
    is_active: bool = True


class FantasyTeamUpdate(ApiModel):
    """Partial update. Only fields present in the payload are written."""
    team_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    team_id: Optional[str] = Field(default=None, min_length=1, max_length=255)
    wins: Optional[int] = Field(default=None, ge=0)
    losses: Optional[int] = Field(default=None, ge=0)
    ties: Optional[int] = Field(default=None, ge=0)
    points_for: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    points_against: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    standing: Optional[int] = Field(default=None, ge=1)
    is_active: Optional[bool] = None

    @field_validator(
        "team_name", "team_id", "wins", "losses", "ties",
        "points_for", "points_against", "is_active",
    )
    @classmethod
    def not_null(cls, v):
        return reject_explicit_null(v)


class FantasyTeamResponse(ApiModel):
    id: int
    user_id: str
    league_id: int
    team_name: str
    team_id: str
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: Decimal = Decimal("0")
    points_against: Decimal = Decimal("0")
    standing: Optional[int] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
