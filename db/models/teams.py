from datetime import datetime
from decimal import Decimal

from peewee import (
    AutoField,
    BooleanField,
    CharField,
    DateTimeField,
    DecimalField,
    ForeignKeyField,
    IntegerField,
)
from db.base import BaseModel
from db.models.leagues import League
from db.models.users import User


class FantasyTeam(BaseModel):
    """
    A user's roster entry within a league.

    wins + losses + ties reflects completed weeks; points totals only
    grow as weekly stats accrue. Neither is enforced here.
    """

    id = AutoField(primary_key=True)
    user = ForeignKeyField(User, backref="fantasy_teams")
    league = ForeignKeyField(League, backref="fantasy_teams")
    team_name = CharField(max_length=255)
    team_id = CharField(max_length=255)  # External team ID from platform
    wins = IntegerField(default=0)
    losses = IntegerField(default=0)
    ties = IntegerField(default=0)
    points_for = DecimalField(max_digits=10, decimal_places=2, default=Decimal("0"))
    points_against = DecimalField(max_digits=10, decimal_places=2, default=Decimal("0"))
    standing = IntegerField(null=True)
    is_active = BooleanField(default=True)
    created_at = DateTimeField(default=datetime.utcnow)
    updated_at = DateTimeField(default=datetime.utcnow)

    class Meta:
        table_name = "fantasy_teams"
        indexes = (
            (("user", "created_at"), False),
            (("league", "standing"), False),
        )

    def save(self, *args, **kwargs):
        """Override save to auto-update updated_at timestamp."""
        self.updated_at = datetime.utcnow()
        return super().save(*args, **kwargs)

    def __repr__(self):
        return f"<FantasyTeam(id={self.id}, user_id='{self.user_id}', league_id={self.league_id}, team_name='{self.team_name}')>"
