"""
Adapters for the gateway's external collaborators.
"""

from .space_adapter import SpaceAdapter
from .vault_resolver import VaultCredentialResolver, StaticCredentialResolver
from .message_loggers import LoggingMessageLogger, HttpMessageLogger

__all__ = [
    "SpaceAdapter",
    "VaultCredentialResolver",
    "StaticCredentialResolver",
    "LoggingMessageLogger",
    "HttpMessageLogger",
]
