"""
Chat Gateway

Forwards chat requests to a completion backend:
- Validates requests and logs conversation turns
- Resolves per-user provider keys for authenticated users
- Maps every failure to a stable JSON error response
- Serves a cached model registry with stale-serve on refresh failure
"""

from .core.gateway import ChatGateway
from .core.registry import ModelRegistry
from .core.interface import CatalogSource, CredentialResolver, MessageLogger, CompletionUpstream
from .config import GatewaySettings, load_settings
from .models.request import ChatRequest, Message
from .models.response import ChatResponse, GatewayResponse
from .models.descriptor import ModelDescriptor

__all__ = [
    "ChatGateway",
    "ModelRegistry",
    "CatalogSource",
    "CredentialResolver",
    "MessageLogger",
    "CompletionUpstream",
    "GatewaySettings",
    "load_settings",
    "ChatRequest",
    "Message",
    "ChatResponse",
    "GatewayResponse",
    "ModelDescriptor",
]
__version__ = "1.0.0"
