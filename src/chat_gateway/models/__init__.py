"""
Chat gateway data models.
"""

from .descriptor import ModelDescriptor
from .request import (
    Attachment,
    ChatRequest,
    InboundLogEntry,
    LoggedMessage,
    Message,
    OutboundLogEntry,
    UpstreamPayload,
)
from .response import ChatResponse, GatewayResponse, UpstreamResult

__all__ = [
    "ModelDescriptor",
    "Attachment",
    "ChatRequest",
    "InboundLogEntry",
    "LoggedMessage",
    "Message",
    "OutboundLogEntry",
    "UpstreamPayload",
    "ChatResponse",
    "GatewayResponse",
    "UpstreamResult",
]
