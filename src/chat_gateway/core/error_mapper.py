"""
Mapping of pipeline failures to client-facing responses.

Two pure functions: ``to_failure`` classifies an arbitrary exception and
``map_failure`` turns a ``Failed`` result into a status code and JSON body.
Client-visible messages are fixed per failure kind; exception text is only
ever logged server-side.
"""

import asyncio
from typing import Any, Dict

from ..models.response import GatewayResponse
from .errors import FailureKind, GatewayError
from .result import Failed

MISSING_INFORMATION = "Error, missing information"

# Upstream statuses that are meaningful to the client as-is
PASSTHROUGH_UPSTREAM_STATUSES = {429, 503, 504}

_STATUS_BY_KIND: Dict[FailureKind, int] = {
    FailureKind.BAD_REQUEST: 400,
    FailureKind.USAGE_LIMIT: 403,
    FailureKind.UPSTREAM_ERROR: 502,
    FailureKind.UPSTREAM_PROTOCOL: 502,
    FailureKind.COLLABORATOR: 500,
    FailureKind.TIMEOUT: 504,
    FailureKind.INTERNAL: 500,
}

_MESSAGE_BY_KIND: Dict[FailureKind, str] = {
    FailureKind.BAD_REQUEST: MISSING_INFORMATION,
    FailureKind.USAGE_LIMIT: "Daily message limit reached",
    FailureKind.UPSTREAM_ERROR: "Completion service request failed",
    FailureKind.UPSTREAM_PROTOCOL: "Invalid response from completion service",
    FailureKind.COLLABORATOR: "Failed to process chat request",
    FailureKind.TIMEOUT: "Request timed out",
    FailureKind.INTERNAL: "Internal server error",
}

_KIND_BY_CODE: Dict[str, FailureKind] = {
    "DAILY_LIMIT_REACHED": FailureKind.USAGE_LIMIT,
}


def to_failure(error: BaseException) -> Failed:
    """
    Classify an exception raised anywhere in the pipeline.

    Checks, in order: a ``kind`` on gateway errors, a known ``code`` string,
    timeouts, and a numeric ``status_code``. Everything else is INTERNAL.
    """
    detail = str(error) or error.__class__.__name__
    code = getattr(error, "code", None)
    status_code = getattr(error, "status_code", None)
    if not isinstance(status_code, int):
        status_code = None
    if not isinstance(code, str):
        code = None

    if isinstance(error, GatewayError):
        kind = error.kind
    elif code in _KIND_BY_CODE:
        kind = _KIND_BY_CODE[code]
    elif isinstance(error, (asyncio.TimeoutError, TimeoutError)):
        kind = FailureKind.TIMEOUT
    elif status_code is not None and status_code >= 400:
        kind = FailureKind.BAD_REQUEST if status_code == 400 else FailureKind.UPSTREAM_ERROR
    else:
        kind = FailureKind.INTERNAL

    return Failed(kind=kind, detail=detail, status_code=status_code, code=code)


def map_failure(failed: Failed) -> GatewayResponse:
    """
    Convert a failed result into the response sent to the client.

    Returns:
        GatewayResponse whose body always carries an ``error`` string
    """
    kind = failed.kind if isinstance(failed.kind, FailureKind) else FailureKind.INTERNAL
    status = _STATUS_BY_KIND.get(kind, 500)
    body: Dict[str, Any] = {"error": _MESSAGE_BY_KIND.get(kind, _MESSAGE_BY_KIND[FailureKind.INTERNAL])}

    if kind == FailureKind.UPSTREAM_ERROR and failed.status_code is not None:
        if failed.status_code in PASSTHROUGH_UPSTREAM_STATUSES:
            status = failed.status_code
        body["error"] = f"{body['error']} with status: {failed.status_code}"
    elif kind == FailureKind.USAGE_LIMIT:
        body["code"] = failed.code or "DAILY_LIMIT_REACHED"

    return GatewayResponse(status_code=status, body=body)
