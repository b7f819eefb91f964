from datetime import datetime

from peewee import (
    AutoField,
    CharField,
    DateTimeField,
    DecimalField,
    ForeignKeyField,
    IntegerField,
)
from db.base import BaseModel
from db.models.teams import FantasyTeam


class WeeklyStats(BaseModel):
    """Per-week scoring record for a fantasy team. One row per (team, year, week)."""

    id = AutoField(primary_key=True)
    team = ForeignKeyField(FantasyTeam, backref="weekly_stats")
    week = IntegerField()
    year = IntegerField()
    points = DecimalField(max_digits=10, decimal_places=2)
    opponent_points = DecimalField(max_digits=10, decimal_places=2, null=True)
    result = CharField(max_length=10, null=True)  # 'W', 'L', 'T'
    created_at = DateTimeField(default=datetime.utcnow)

    class Meta:
        table_name = "weekly_stats"
        indexes = (
            (("team", "year", "week"), True),
        )

    def __repr__(self):
        return f"<WeeklyStats(team_id={self.team_id}, year={self.year}, week={self.week}, result={self.result})>"
