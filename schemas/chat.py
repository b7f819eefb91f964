from datetime import datetime

from pydantic import Field

from schemas.common import ApiModel


class ChatMessageCreate(ApiModel):
    league_id: int = Field(ge=1)
    user_id: str = Field(min_length=1)
    message: str = Field(min_length=1, description="Message cannot be empty")


class ChatMessageResponse(ApiModel):
    id: int
    league_id: int
    user_id: str
    message: str
    created_at: datetime
