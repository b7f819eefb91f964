"""
Session Model

Server-side session store shared with the external login flow. Each row
holds a JSON document whose ``claims`` entry identifies the signed-in
user (``sub`` is the user id).
"""

import json
import secrets
from datetime import datetime, timedelta
from typing import Any, Optional

from peewee import (
    CharField,
    DateTimeField,
    TextField,
)

from db.base import BaseModel

DEFAULT_SESSION_TTL = timedelta(days=7)


class Session(BaseModel):
    """
    Attributes:
        sid: Opaque session id, sent to the browser as a cookie
        sess: JSON session document
        expire: When the session stops being valid
    """

    sid = CharField(max_length=255, primary_key=True)
    sess = TextField()
    expire = DateTimeField(index=True)

    class Meta:
        table_name = "sessions"

    def __repr__(self) -> str:
        return f"<Session(sid={self.sid[:8]}..., expire={self.expire})>"

    @property
    def claims(self) -> dict[str, Any]:
        """Identity claims stored in the session document."""
        try:
            document = json.loads(self.sess)
        except (TypeError, json.JSONDecodeError):
            return {}
        claims = document.get("claims") if isinstance(document, dict) else None
        return claims if isinstance(claims, dict) else {}

    @property
    def is_expired(self) -> bool:
        return self.expire <= datetime.utcnow()

    @classmethod
    def open(
        cls,
        claims: dict[str, Any],
        ttl: timedelta = DEFAULT_SESSION_TTL,
    ) -> "Session":
        """
        Create a session for the given identity claims.

        Args:
            claims: Identity claims; must contain ``sub``
            ttl: How long the session stays valid

        Returns:
            The created Session instance
        """
        if not claims.get("sub"):
            raise ValueError("claims must include a 'sub' user id")
        return cls.create(
            sid=secrets.token_urlsafe(32),
            sess=json.dumps({"claims": claims}),
            expire=datetime.utcnow() + ttl,
        )

    @classmethod
    def resolve(cls, sid: str) -> Optional[dict[str, Any]]:
        """
        Return the claims of an unexpired session, or None.

        Args:
            sid: Session id from the request cookie
        """
        session = cls.get_or_none(cls.sid == sid)
        if session is None or session.is_expired:
            return None
        claims = session.claims
        return claims if claims.get("sub") else None
