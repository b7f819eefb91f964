"""
Dashboard Service

Display logic for the caller's dashboard. Everything here is a pure
function of already-fetched rows: no queries, no caching.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from schemas.dashboard import (
    DashboardResponse,
    DashboardSummary,
    DashboardTeam,
    PerformanceBand,
    TeamLeagueInfo,
    Trend,
)
from schemas.teams import FantasyTeamResponse

FAVORABLE_WIN_RATIO = 0.7
NEUTRAL_WIN_RATIO = 0.5


def win_ratio(team) -> Optional[float]:
    """wins / games played, or None before the first completed week."""
    wins = team.wins or 0
    played = wins + (team.losses or 0) + (team.ties or 0)
    if played == 0:
        return None
    return wins / played


def performance_band(team) -> PerformanceBand:
    """
    Color band for a team's record.

    >= 0.7 is favorable, >= 0.5 neutral, anything lower (or no games yet)
    unfavorable.
    """
    ratio = win_ratio(team)
    if ratio is None:
        return PerformanceBand.UNFAVORABLE
    if ratio >= FAVORABLE_WIN_RATIO:
        return PerformanceBand.FAVORABLE
    if ratio >= NEUTRAL_WIN_RATIO:
        return PerformanceBand.NEUTRAL
    return PerformanceBand.UNFAVORABLE


def trend(team) -> Trend:
    """Up when points-for beats points-against, otherwise down."""
    points_for = Decimal(team.points_for or 0)
    points_against = Decimal(team.points_against or 0)
    return Trend.UP if points_for > points_against else Trend.DOWN


def build_summary(teams: list, league_count: int) -> DashboardSummary:
    total_points = sum((Decimal(t.points_for or 0) for t in teams), Decimal("0"))
    return DashboardSummary(
        total_teams=len(teams),
        winning_teams=sum(1 for t in teams if (t.wins or 0) > (t.losses or 0)),
        active_leagues=league_count,
        total_points=total_points.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP),
    )


def build_dashboard(teams: list, leagues: Iterable) -> DashboardResponse:
    """
    Assemble the dashboard for one user's teams.

    Args:
        teams: The caller's FantasyTeam rows
        leagues: League rows, used for the league label on each card
    """
    leagues_by_id = {league.id: league for league in leagues}

    cards = []
    for team in teams:
        league = leagues_by_id.get(team.league_id)
        cards.append(
            DashboardTeam(
                **FantasyTeamResponse.model_validate(team).model_dump(),
                league=(
                    TeamLeagueInfo(name=league.name, sport=league.sport, platform=league.platform)
                    if league is not None
                    else None
                ),
                win_ratio=win_ratio(team),
                performance=performance_band(team),
                trend=trend(team),
            )
        )

    return DashboardResponse(
        summary=build_summary(teams, len(leagues_by_id)),
        teams=cards,
    )
