from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from schemas.common import ApiModel

CLAIM_FIELDS = ("email", "first_name", "last_name", "profile_image_url")


class UserUpsert(ApiModel):
    """Identity record supplied by the auth collaborator. Keyed by ``id``."""
    id: str = Field(min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    first_name: Optional[str] = Field(None, max_length=255)
    last_name: Optional[str] = Field(None, max_length=255)
    profile_image_url: Optional[str] = Field(None, max_length=1024)

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "UserUpsert":
        """Build an upsert from session claims; only claims present are set."""
        data = {"id": claims.get("sub")}
        data.update({k: claims[k] for k in CLAIM_FIELDS if k in claims})
        return cls.model_validate(data)


class UserResponse(ApiModel):
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
