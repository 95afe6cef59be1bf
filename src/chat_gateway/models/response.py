"""
Response models for the chat gateway.
"""

from typing import Dict, Any
from dataclasses import dataclass, field
from pydantic import BaseModel, Field, field_validator


class UpstreamResult(BaseModel):
    """Body returned by the completion service."""
    message: str = Field(..., min_length=1)

    class Config:
        extra = "allow"

    @field_validator("message", mode="before")
    @classmethod
    def _scalar_message(cls, value: Any) -> Any:
        # Numbers and booleans are accepted as text; falsy ones are empty
        if isinstance(value, (bool, int, float)):
            return str(value) if value else ""
        return value


class ChatResponse(BaseModel):
    """Successful response returned to the client."""
    message: str


@dataclass(frozen=True)
class GatewayResponse:
    """Status code and JSON body produced by the gateway for one request."""
    status_code: int
    body: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300
