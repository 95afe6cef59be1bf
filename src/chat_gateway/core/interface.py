"""
Collaborator interfaces consumed by the registry and the chat gateway.

Concrete implementations live in ``chat_gateway.adapters`` and
``chat_gateway.core.catalog``; the gateway only depends on these contracts.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence, Union, Dict, Any

from ..models.descriptor import ModelDescriptor
from ..models.request import InboundLogEntry, OutboundLogEntry, UpstreamPayload


class CatalogSource(ABC):
    """Source the model registry refreshes from."""

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @abstractmethod
    async def fetch(self) -> Sequence[ModelDescriptor]:
        """
        Fetch a complete list of model descriptors.

        Raises:
            Exception: Any failure; the registry recovers from it.
        """
        pass


class CredentialResolver(ABC):
    """Looks up the API key a user has configured for a provider family."""

    @abstractmethod
    async def resolve(self, user_id: str, provider: str) -> Optional[str]:
        """
        Resolve the effective credential for a user and provider.

        Args:
            user_id: Authenticated user identifier
            provider: Provider family (e.g., "openrouter")

        Returns:
            The credential, or None when none is configured

        Raises:
            CredentialResolutionError: If the credential store cannot be reached
        """
        pass

    async def has_key(self, user_id: str, provider: str) -> bool:
        """Whether the user has configured their own key for a provider."""
        return bool(await self.resolve(user_id, provider))

    async def close(self) -> None:
        """Release any held resources."""
        pass


LogEntry = Union[InboundLogEntry, OutboundLogEntry]


class MessageLogger(ABC):
    """Persists chat turns to the conversation history store."""

    @abstractmethod
    async def log(self, entry: LogEntry) -> None:
        """
        Persist one chat turn.

        Raises:
            MessageLogError: If the entry could not be stored
            UsageLimitError: If the user is over their daily message limit
        """
        pass

    async def close(self) -> None:
        """Release any held resources."""
        pass


class CompletionUpstream(ABC):
    """External backend that generates assistant responses."""

    @abstractmethod
    async def complete(
        self,
        payload: UpstreamPayload,
        api_key: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Issue a single completion request.

        Args:
            payload: Merged prompt and search flag
            api_key: Bearer credential, if any

        Returns:
            Decoded JSON body of a 2xx response

        Raises:
            UpstreamError: On a non-2xx status or transport failure
            UpstreamProtocolError: If a 2xx body is not JSON
        """
        pass

    async def close(self) -> None:
        """Release any held resources."""
        pass
