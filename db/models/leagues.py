from datetime import datetime

from peewee import (
    AutoField,
    CharField,
    DateTimeField,
    TextField,
)
from db.base import BaseModel


class League(BaseModel):
    """One external fantasy league tracked by the hub."""

    id = AutoField(primary_key=True)
    name = CharField(max_length=255)
    platform = CharField(max_length=50)  # 'ESPN', 'Yahoo', 'Sleeper', ...
    sport = CharField(max_length=50)  # 'NFL', 'NBA', 'MLB', ...
    season = CharField(max_length=10)  # '2024', '2023-24', ...
    league_id = CharField(max_length=255)  # External league ID from platform
    settings = TextField(null=True)  # JSON string, platform-specific
    created_at = DateTimeField(default=datetime.utcnow, index=True)
    updated_at = DateTimeField(default=datetime.utcnow)

    class Meta:
        table_name = "leagues"

    def save(self, *args, **kwargs):
        """Override save to auto-update updated_at timestamp."""
        self.updated_at = datetime.utcnow()
        return super().save(*args, **kwargs)

    def __repr__(self):
        return f"<League(id={self.id}, name='{self.name}', platform='{self.platform}', season='{self.season}')>"
