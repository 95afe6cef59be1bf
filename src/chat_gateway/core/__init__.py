"""
Core chat gateway components.
"""

from .interface import CatalogSource, CredentialResolver, MessageLogger, CompletionUpstream
from .catalog import StaticCatalogSource, YamlCatalogSource
from .registry import ModelRegistry, CACHE_TTL_SECONDS
from .providers import provider_for_model
from .gateway import ChatGateway
from .error_mapper import map_failure, to_failure
from .result import Ok, Failed, Result
from .errors import (
    FailureKind,
    GatewayError,
    BadRequestError,
    UpstreamError,
    UpstreamProtocolError,
    CredentialResolutionError,
    MessageLogError,
    UsageLimitError,
    GatewayTimeoutError,
    CatalogLoadError,
)

__all__ = [
    "CatalogSource",
    "CredentialResolver",
    "MessageLogger",
    "CompletionUpstream",
    "StaticCatalogSource",
    "YamlCatalogSource",
    "ModelRegistry",
    "CACHE_TTL_SECONDS",
    "provider_for_model",
    "ChatGateway",
    "map_failure",
    "to_failure",
    "Ok",
    "Failed",
    "Result",
    "FailureKind",
    "GatewayError",
    "BadRequestError",
    "UpstreamError",
    "UpstreamProtocolError",
    "CredentialResolutionError",
    "MessageLogError",
    "UsageLimitError",
    "GatewayTimeoutError",
    "CatalogLoadError",
]
