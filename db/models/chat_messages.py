from datetime import datetime

from peewee import (
    AutoField,
    DateTimeField,
    ForeignKeyField,
    TextField,
)
from db.base import BaseModel
from db.models.leagues import League
from db.models.users import User


class ChatMessage(BaseModel):
    """League chat message. Immutable once created."""

    id = AutoField(primary_key=True)
    league = ForeignKeyField(League, backref="chat_messages")
    user = ForeignKeyField(User, backref="chat_messages")
    message = TextField()
    created_at = DateTimeField(default=datetime.utcnow)

    class Meta:
        table_name = "chat_messages"
        indexes = (
            (("league", "created_at"), False),
        )

    def __repr__(self):
        return f"<ChatMessage(id={self.id}, league_id={self.league_id}, user_id='{self.user_id}')>"
