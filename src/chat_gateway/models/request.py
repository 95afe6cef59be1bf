"""
Inbound request and upstream payload models.
"""

from typing import Optional, List, Any, Literal
from pydantic import BaseModel, Field, AliasChoices, field_validator
from pydantic.alias_generators import to_camel


class Attachment(BaseModel):
    """File attached to a user message."""
    url: str
    content_type: Optional[str] = None
    name: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "allow"


class Message(BaseModel):
    """A single chat message as sent by the client."""
    role: Literal["system", "user", "assistant", "tool"]
    content: str = ""
    attachments: Optional[List[Attachment]] = Field(
        default=None,
        validation_alias=AliasChoices(
            "attachments", "experimental_attachments", "experimentalAttachments"
        ),
    )

    class Config:
        extra = "allow"


def _coerce_flag(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


class ChatRequest(BaseModel):
    """
    Chat request posted to ``/chat``.

    Required fields are declared optional here so that a missing field is
    reported by the gateway as a bad request instead of a schema error.
    ``model`` and the boolean flags are coerced rather than validated.
    """
    messages: Optional[List[Message]] = None
    chat_id: Optional[str] = None
    user_id: Optional[str] = None
    model: Optional[str] = None
    is_authenticated: bool = False
    system_prompt: Optional[str] = None
    enable_search: bool = False

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "allow"

    @field_validator("chat_id", "user_id", "model", "system_prompt", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        # false, 0 and empty containers count as absent
        if not value:
            return None
        return str(value)

    @field_validator("is_authenticated", "enable_search", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> bool:
        return _coerce_flag(value)

    def missing_fields(self) -> List[str]:
        """Names of required fields that are absent or empty."""
        missing = []
        if not self.messages:
            missing.append("messages")
        if not self.chat_id:
            missing.append("chatId")
        if not self.user_id:
            missing.append("userId")
        return missing

    @property
    def last_message(self) -> Optional[Message]:
        if not self.messages:
            return None
        return self.messages[-1]


class UpstreamInputs(BaseModel):
    prompt: str
    enable_search: bool = False


class UpstreamPayload(BaseModel):
    """Body sent to the completion service."""
    inputs: UpstreamInputs

    @classmethod
    def build(cls, prompt: str, enable_search: bool) -> "UpstreamPayload":
        return cls(inputs=UpstreamInputs(prompt=prompt, enable_search=enable_search))


class InboundLogEntry(BaseModel):
    """User turn handed to the message logger."""
    user_id: str
    chat_id: str
    content: str
    attachments: Optional[List[Attachment]] = None
    model: Optional[str] = None
    is_authenticated: bool = False

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class LoggedMessage(BaseModel):
    role: Literal["assistant"] = "assistant"
    content: str
    sender: str = "assistant"


class OutboundLogEntry(BaseModel):
    """Assistant turn handed to the message logger."""
    chat_id: str
    messages: List[LoggedMessage]

    class Config:
        alias_generator = to_camel
        populate_by_name = True
