"""
Dashboard Response Schemas

Pydantic models for the caller's dashboard: aggregate counters plus
per-team display fields (performance band, trend arrow).
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from schemas.common import ApiModel
from schemas.teams import FantasyTeamResponse


class PerformanceBand(str, Enum):
    FAVORABLE = "favorable"
    NEUTRAL = "neutral"
    UNFAVORABLE = "unfavorable"


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"


class TeamLeagueInfo(ApiModel):
    name: str
    sport: str
    platform: str


class DashboardTeam(FantasyTeamResponse):
    """A team card: the team row plus derived display fields."""
    league: Optional[TeamLeagueInfo] = None
    win_ratio: Optional[float] = None
    performance: PerformanceBand
    trend: Trend


class DashboardSummary(ApiModel):
    total_teams: int
    winning_teams: int
    active_leagues: int
    total_points: Decimal


class DashboardResponse(ApiModel):
    summary: DashboardSummary
    teams: list[DashboardTeam]
