"""
Unit tests for failure classification and client response mapping.
"""
import asyncio

import pytest

from chat_gateway.core.error_mapper import map_failure, to_failure
from chat_gateway.core.errors import (
    BadRequestError,
    CredentialResolutionError,
    FailureKind,
    GatewayTimeoutError,
    MessageLogError,
    UpstreamError,
    UpstreamProtocolError,
    UsageLimitError,
)
from chat_gateway.core.result import Failed


class CodedError(Exception):
    """Foreign error carrying a code string."""

    def __init__(self, message, code):
        super().__init__(message)
        self.code = code


class StatusError(Exception):
    """Foreign error carrying a numeric status."""

    def __init__(self, message, status_code):
        super().__init__(message)
        self.status_code = status_code


class TestToFailure:
    """Test exception classification."""

    @pytest.mark.parametrize("error,kind", [
        (BadRequestError("missing chatId"), FailureKind.BAD_REQUEST),
        (UpstreamError("boom", status_code=500), FailureKind.UPSTREAM_ERROR),
        (UpstreamProtocolError("no message"), FailureKind.UPSTREAM_PROTOCOL),
        (CredentialResolutionError("vault down"), FailureKind.COLLABORATOR),
        (MessageLogError("db down"), FailureKind.COLLABORATOR),
        (UsageLimitError("limit"), FailureKind.USAGE_LIMIT),
        (GatewayTimeoutError("slow"), FailureKind.TIMEOUT),
    ])
    def test_gateway_errors_use_their_kind(self, error, kind):
        """Gateway errors are classified by their kind."""
        assert to_failure(error).kind == kind

    def test_code_discriminator(self):
        """A foreign error with a known code is classified by it."""
        failed = to_failure(CodedError("too many", code="DAILY_LIMIT_REACHED"))
        assert failed.kind == FailureKind.USAGE_LIMIT
        assert failed.code == "DAILY_LIMIT_REACHED"

    def test_status_discriminator(self):
        """A foreign error with a numeric status is classified by it."""
        assert to_failure(StatusError("bad", 400)).kind == FailureKind.BAD_REQUEST
        failed = to_failure(StatusError("gateway", 502))
        assert failed.kind == FailureKind.UPSTREAM_ERROR
        assert failed.status_code == 502

    def test_timeout(self):
        """Timeouts are classified as TIMEOUT."""
        assert to_failure(asyncio.TimeoutError()).kind == FailureKind.TIMEOUT

    def test_unknown_error_is_internal(self):
        """Anything unrecognized is INTERNAL."""
        failed = to_failure(KeyError("x"))
        assert failed.kind == FailureKind.INTERNAL
        assert failed.status_code is None

    def test_upstream_status_preserved(self):
        """The upstream status travels with the failure."""
        assert to_failure(UpstreamError("boom", status_code=503)).status_code == 503


class TestMapFailure:
    """Test client response mapping."""

    @pytest.mark.parametrize("kind,status", [
        (FailureKind.BAD_REQUEST, 400),
        (FailureKind.USAGE_LIMIT, 403),
        (FailureKind.UPSTREAM_ERROR, 502),
        (FailureKind.UPSTREAM_PROTOCOL, 502),
        (FailureKind.COLLABORATOR, 500),
        (FailureKind.TIMEOUT, 504),
        (FailureKind.INTERNAL, 500),
    ])
    def test_status_by_kind(self, kind, status):
        """Each kind maps to a fixed status with an error string."""
        response = map_failure(Failed(kind=kind, detail="internal detail"))
        assert response.status_code == status
        assert isinstance(response.body["error"], str)
        assert "internal detail" not in response.body["error"]

    def test_bad_request_message(self):
        """Bad requests carry the fixed missing-information message."""
        response = map_failure(Failed(kind=FailureKind.BAD_REQUEST))
        assert response.body == {"error": "Error, missing information"}

    @pytest.mark.parametrize("upstream,client", [
        (500, 502),
        (401, 502),
        (429, 429),
        (503, 503),
        (504, 504),
    ])
    def test_upstream_status_mapping(self, upstream, client):
        """Only meaningful upstream statuses are passed through."""
        response = map_failure(Failed(kind=FailureKind.UPSTREAM_ERROR, status_code=upstream))
        assert response.status_code == client
        assert str(upstream) in response.body["error"]

    def test_usage_limit_carries_code(self):
        """Usage limit responses include the limit code."""
        response = map_failure(Failed(kind=FailureKind.USAGE_LIMIT))
        assert response.body["code"] == "DAILY_LIMIT_REACHED"
        assert not response.ok
