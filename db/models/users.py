from datetime import datetime

from peewee import (
    CharField,
    DateTimeField,
)
from db.base import BaseModel


class User(BaseModel):
    id = CharField(max_length=255, primary_key=True)  # external identity id (auth "sub" claim)
    email = CharField(max_length=255, unique=True, null=True)
    first_name = CharField(max_length=255, null=True)
    last_name = CharField(max_length=255, null=True)
    profile_image_url = CharField(max_length=1024, null=True)
    created_at = DateTimeField(default=datetime.utcnow)
    updated_at = DateTimeField(default=datetime.utcnow)

    class Meta:
        table_name = "users"

    def save(self, *args, **kwargs):
        """Override save to auto-update updated_at timestamp."""
        self.updated_at = datetime.utcnow()
        return super().save(*args, **kwargs)

    def __repr__(self):
        return f"<User(id='{self.id}', email='{self.email}')>"
