"""
Collaborator fakes shared by chat gateway tests.
"""
import asyncio
from typing import Any, Dict, List, Optional, Sequence, Tuple

from chat_gateway.core.interface import (
    CatalogSource,
    CompletionUpstream,
    CredentialResolver,
    MessageLogger,
)
from chat_gateway.core.errors import CatalogLoadError
from chat_gateway.models.descriptor import ModelDescriptor
from chat_gateway.models.request import InboundLogEntry, UpstreamPayload


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FlakySource(CatalogSource):
    """Catalog source that counts fetches and can be told to fail."""

    def __init__(self, models: Sequence[ModelDescriptor]):
        self.models = list(models)
        self.calls = 0
        self.fail = False

    async def fetch(self) -> Sequence[ModelDescriptor]:
        self.calls += 1
        if self.fail:
            raise CatalogLoadError("catalog backend unavailable")
        return list(self.models)


class FakeUpstream(CompletionUpstream):
    """Completion upstream returning a canned body or raising a canned error."""

    def __init__(self, events: List[str], body: Any = None, error: Exception = None, delay: float = 0):
        self.events = events
        self.body = {"message": "hello"} if body is None else body
        self.error = error
        self.delay = delay
        self.calls: List[Tuple[UpstreamPayload, Optional[str]]] = []

    async def complete(self, payload: UpstreamPayload, api_key: Optional[str] = None) -> Dict[str, Any]:
        self.events.append("upstream")
        self.calls.append((payload, api_key))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.body


class RecordingLogger(MessageLogger):
    """Message logger that records entries and can fail on a given turn."""

    def __init__(self, events: List[str], error: Exception = None, fail_on: str = "user"):
        self.events = events
        self.entries: List[Any] = []
        self.error = error
        self.fail_on = fail_on

    async def log(self, entry) -> None:
        turn = "user" if isinstance(entry, InboundLogEntry) else "assistant"
        self.events.append(f"log:{turn}")
        if self.error is not None and turn == self.fail_on:
            raise self.error
        self.entries.append(entry)


class FakeResolver(CredentialResolver):
    """Credential resolver backed by a dict keyed by (user_id, provider)."""

    def __init__(self, events: List[str], keys: Dict[Tuple[str, str], str] = None, error: Exception = None):
        self.events = events
        self.keys = keys or {}
        self.error = error
        self.calls: List[Tuple[str, str]] = []

    async def resolve(self, user_id: str, provider: str) -> Optional[str]:
        self.events.append("resolve")
        self.calls.append((user_id, provider))
        if self.error is not None:
            raise self.error
        return self.keys.get((user_id, provider))


def make_descriptor(model_id: str, provider_id: str = "openrouter", **kwargs) -> ModelDescriptor:
    return ModelDescriptor(id=model_id, provider_id=provider_id, name=model_id, **kwargs)


