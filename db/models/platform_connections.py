from datetime import datetime

from peewee import (
    AutoField,
    BooleanField,
    CharField,
    DateTimeField,
    ForeignKeyField,
    TextField,
)
from db.base import BaseModel
from db.models.users import User


class PlatformConnection(BaseModel):
    """
    OAuth credentials linking a user to one external fantasy platform.

    Connections are soft-deactivated (is_active=False), never deleted.
    """

    id = AutoField(primary_key=True)
    user = ForeignKeyField(User, backref="platform_connections")
    platform = CharField(max_length=50)
    access_token = TextField(null=True)
    refresh_token = TextField(null=True)
    expires_at = DateTimeField(null=True)
    is_active = BooleanField(default=True)
    created_at = DateTimeField(default=datetime.utcnow)
    updated_at = DateTimeField(default=datetime.utcnow)

    class Meta:
        table_name = "platform_connections"
        indexes = (
            (("user", "is_active"), False),
        )

    def save(self, *args, **kwargs):
        """Override save to auto-update updated_at timestamp."""
        self.updated_at = datetime.utcnow()
        return super().save(*args, **kwargs)

    def __repr__(self):
        return f"<PlatformConnection(id={self.id}, user_id='{self.user_id}', platform='{self.platform}', active={self.is_active})>"
