from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# ------------------------------- Base Models ------------------------------- #

class ApiModel(BaseModel):
    """
    Base model for request and response bodies.

    Fields are snake_case in Python and camelCase on the wire. Unknown
    keys (including server-managed ones such as id or createdAt) are
    dropped on input.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )

# ------------------------------- Error Helpers ------------------------------- #

def error_response(message: str = "An error occurred") -> dict[str, Any]:
    """Body for every error response: a single human-readable message."""
    return {"message": message}

# ------------------------------- Shared Enums ------------------------------- #

class ResultCode(str, Enum):
    """Outcome of a weekly matchup."""
    WIN = "W"
    LOSS = "L"
    TIE = "T"


def reject_explicit_null(value: Any) -> Any:
    """Used by partial-update models for columns that may not be NULL."""
    if value is None:
        raise ValueError("field may be omitted but not null")
    return value
