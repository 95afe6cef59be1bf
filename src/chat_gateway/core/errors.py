"""
Chat gateway error types.
"""

from enum import Enum
from typing import Optional


class FailureKind(str, Enum):
    """Categories of pipeline failure."""
    BAD_REQUEST = "bad_request"
    UPSTREAM_ERROR = "upstream_error"
    UPSTREAM_PROTOCOL = "upstream_protocol"
    COLLABORATOR = "collaborator"
    USAGE_LIMIT = "usage_limit"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


class GatewayError(Exception):
    """Base exception for gateway errors."""

    kind: FailureKind = FailureKind.INTERNAL

    def __init__(self, message: str, component: str = None):
        self.message = message
        self.component = component
        super().__init__(message)


class BadRequestError(GatewayError):
    """Raised when the inbound request is missing required information."""
    kind = FailureKind.BAD_REQUEST


class UpstreamError(GatewayError):
    """Raised when the completion service answers with a non-2xx status or cannot be reached."""
    kind = FailureKind.UPSTREAM_ERROR

    def __init__(self, message: str, component: str = None, status_code: Optional[int] = None):
        super().__init__(message, component)
        self.status_code = status_code


class UpstreamProtocolError(GatewayError):
    """Raised when a 2xx completion response is not the expected shape."""
    kind = FailureKind.UPSTREAM_PROTOCOL


class CredentialResolutionError(GatewayError):
    """Raised when the credential store cannot be queried."""
    kind = FailureKind.COLLABORATOR


class MessageLogError(GatewayError):
    """Raised when a chat message cannot be persisted."""
    kind = FailureKind.COLLABORATOR


class UsageLimitError(MessageLogError):
    """Raised by a message logger when the user has exhausted their daily allowance."""
    kind = FailureKind.USAGE_LIMIT
    code = "DAILY_LIMIT_REACHED"


class GatewayTimeoutError(GatewayError):
    """Raised when a request exceeds its wall-clock budget."""
    kind = FailureKind.TIMEOUT


class CatalogLoadError(GatewayError):
    """Raised when a catalog source cannot produce model descriptors."""
    pass
