"""
Chat request pipeline.

A request moves through validation, inbound logging, credential
resolution, the upstream call, upstream validation and outbound logging.
Each stage returns ``Ok`` or ``Failed``; the first ``Failed`` ends the
request and is turned into a client response by the error mapper.
"""

import asyncio
import dataclasses
import logging
from typing import Any, Optional

from opentelemetry import trace
from pydantic import ValidationError

from ..config import SYSTEM_PROMPT_DEFAULT
from ..models.request import (
    ChatRequest,
    InboundLogEntry,
    LoggedMessage,
    OutboundLogEntry,
    UpstreamPayload,
)
from ..models.response import ChatResponse, GatewayResponse, UpstreamResult
from .error_mapper import MISSING_INFORMATION, map_failure, to_failure
from .errors import FailureKind
from .interface import CompletionUpstream, CredentialResolver, MessageLogger
from .providers import provider_for_model
from .registry import ModelRegistry
from .result import Failed, Ok, Result

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

REQUEST_TIMEOUT_SECONDS = 60.0


def _as_kind(failed: Failed, kind: FailureKind) -> Failed:
    """Re-tag an unclassified failure with the kind of the stage it came from."""
    if failed.kind == FailureKind.INTERNAL:
        return dataclasses.replace(failed, kind=kind)
    return failed


class ChatGateway:
    """
    Orchestrates one chat request end to end.

    Collaborators are injected; the credential resolver is only called for
    authenticated requests whose model maps to a known provider family.
    """

    def __init__(
        self,
        upstream: CompletionUpstream,
        message_logger: MessageLogger,
        credential_resolver: CredentialResolver,
        registry: Optional[ModelRegistry] = None,
        default_system_prompt: str = SYSTEM_PROMPT_DEFAULT,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ):
        """
        Initialize the gateway.

        Args:
            upstream: Completion backend
            message_logger: Conversation history store
            credential_resolver: Per-user provider key lookup
            registry: Registry used to derive a model's provider family
            default_system_prompt: Prompt used when the request carries none
            timeout: Wall-clock budget for a whole request in seconds
        """
        self.upstream = upstream
        self.message_logger = message_logger
        self.credential_resolver = credential_resolver
        self.registry = registry
        self.default_system_prompt = default_system_prompt
        self.timeout = timeout

    async def handle(self, body: Any) -> GatewayResponse:
        """
        Process one chat request.

        Args:
            body: Decoded JSON body, or an already-parsed ChatRequest

        Returns:
            Status code and JSON body for the client. Never raises.
        """
        with tracer.start_as_current_span("chat_gateway.handle") as span:
            try:
                result = await asyncio.wait_for(self._run(body, span), timeout=self.timeout)
            except asyncio.TimeoutError:
                result = Failed(
                    kind=FailureKind.TIMEOUT,
                    detail=f"Request exceeded {self.timeout}s budget",
                )
            except Exception as e:
                logger.exception(f"Unhandled error in chat pipeline: {e}")
                result = to_failure(e)

            if isinstance(result, Failed):
                span.set_attribute("chat.failure_kind", result.kind.value)
                self._log_failure(result)
                return map_failure(result)

            return GatewayResponse(
                status_code=200,
                body=ChatResponse(message=result.value).model_dump(),
            )

    async def _run(self, body: Any, span: trace.Span) -> Result:
        validated = self._validate(body)
        if isinstance(validated, Failed):
            return validated
        request: ChatRequest = validated.value

        span.set_attribute("chat.id", request.chat_id)
        span.set_attribute("chat.model", request.model or "")
        span.set_attribute("chat.authenticated", request.is_authenticated)
        provider = provider_for_model(request.model, self.registry)
        span.set_attribute("chat.provider", provider or "")

        logged = await self._log_inbound(request)
        if isinstance(logged, Failed):
            return logged

        prompt = self.build_prompt(request)

        credential = await self._resolve_credential(request, provider)
        if isinstance(credential, Failed):
            return credential

        payload = UpstreamPayload.build(prompt, request.enable_search)
        upstream = await self._call_upstream(payload, credential.value)
        if isinstance(upstream, Failed):
            return upstream

        unwrapped = self._unwrap(upstream.value)
        if isinstance(unwrapped, Failed):
            return unwrapped
        content: str = unwrapped.value

        logged = await self._log_outbound(request, content)
        if isinstance(logged, Failed):
            return logged

        return Ok(content)

    def _validate(self, body: Any) -> Result:
        if isinstance(body, ChatRequest):
            request = body
        elif isinstance(body, dict):
            try:
                request = ChatRequest.model_validate(body)
            except ValidationError as e:
                return Failed(kind=FailureKind.BAD_REQUEST, detail=f"Unparseable chat request: {e}")
        else:
            return Failed(kind=FailureKind.BAD_REQUEST, detail="Chat request body is not a JSON object")

        missing = request.missing_fields()
        if missing:
            return Failed(
                kind=FailureKind.BAD_REQUEST,
                detail=f"{MISSING_INFORMATION}: {', '.join(missing)}",
            )
        return Ok(request)

    async def _log_inbound(self, request: ChatRequest) -> Result:
        message = request.last_message
        # Only a trailing user turn is logged; the upstream is called either way
        if message is None or message.role != "user":
            return Ok(None)

        entry = InboundLogEntry(
            user_id=request.user_id,
            chat_id=request.chat_id,
            content=message.content,
            attachments=message.attachments,
            model=request.model,
            is_authenticated=request.is_authenticated,
        )
        try:
            await self.message_logger.log(entry)
        except Exception as e:
            return _as_kind(to_failure(e), FailureKind.COLLABORATOR)
        return Ok(None)

    def build_prompt(self, request: ChatRequest) -> str:
        """Merge the effective system prompt with the last message's content."""
        system_prompt = request.system_prompt or self.default_system_prompt
        message = request.last_message
        content = message.content if message is not None else ""
        return f"{system_prompt}\n{content}"

    async def _resolve_credential(self, request: ChatRequest, provider: Optional[str]) -> Result:
        if not request.is_authenticated:
            return Ok(None)

        if provider is None:
            logger.debug(f"No provider family for model {request.model!r}, skipping key lookup")
            return Ok(None)

        try:
            api_key = await self.credential_resolver.resolve(request.user_id, provider)
        except Exception as e:
            return _as_kind(to_failure(e), FailureKind.COLLABORATOR)
        return Ok(api_key or None)

    async def _call_upstream(self, payload: UpstreamPayload, api_key: Optional[str]) -> Result:
        with tracer.start_as_current_span("chat_gateway.upstream") as span:
            span.set_attribute("upstream.has_credential", bool(api_key))
            span.set_attribute("upstream.enable_search", payload.inputs.enable_search)
            try:
                data = await self.upstream.complete(payload, api_key)
            except Exception as e:
                failed = _as_kind(to_failure(e), FailureKind.UPSTREAM_ERROR)
                if failed.status_code is not None:
                    span.set_attribute("upstream.status_code", failed.status_code)
                return failed
        return Ok(data)

    def _unwrap(self, data: Any) -> Result:
        if not isinstance(data, dict):
            return Failed(
                kind=FailureKind.UPSTREAM_PROTOCOL,
                detail=f"Expected a JSON object from completion service, got {type(data).__name__}",
            )
        try:
            result = UpstreamResult.model_validate(data)
        except ValidationError as e:
            return Failed(
                kind=FailureKind.UPSTREAM_PROTOCOL,
                detail=f"Completion response missing message: {e.error_count()} validation error(s)",
            )
        return Ok(result.message)

    async def _log_outbound(self, request: ChatRequest, content: str) -> Result:
        entry = OutboundLogEntry(
            chat_id=request.chat_id,
            messages=[LoggedMessage(role="assistant", content=content, sender="assistant")],
        )
        try:
            await self.message_logger.log(entry)
        except Exception as e:
            return _as_kind(to_failure(e), FailureKind.COLLABORATOR)
        return Ok(None)

    def _log_failure(self, failed: Failed) -> None:
        if failed.kind == FailureKind.BAD_REQUEST:
            logger.warning(f"Rejected chat request: {failed.detail}")
        elif failed.kind == FailureKind.UPSTREAM_ERROR:
            logger.error(f"Completion service request failed (status={failed.status_code}): {failed.detail}")
        elif failed.kind == FailureKind.UPSTREAM_PROTOCOL:
            logger.error(f"Completion service protocol violation: {failed.detail}")
        elif failed.kind == FailureKind.USAGE_LIMIT:
            logger.info(f"Chat request over usage limit: {failed.detail}")
        else:
            logger.error(f"Chat request failed ({failed.kind.value}): {failed.detail}")
