"""
Completion upstream adapter for a Hugging Face Space chat endpoint.
"""

import logging
from typing import Optional, Dict, Any
import httpx

from ..core.interface import CompletionUpstream
from ..core.errors import UpstreamError, UpstreamProtocolError
from ..models.request import UpstreamPayload

logger = logging.getLogger(__name__)


class SpaceAdapter(CompletionUpstream):
    """
    Adapter for a single fixed completion endpoint.

    Sends one POST per request with no retries. The bearer credential is
    per request, so it is set on each call rather than on the client.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 55.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the adapter.

        Args:
            url: Full URL of the chat endpoint
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self._url = url
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def url(self) -> str:
        return self._url

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def complete(
        self,
        payload: UpstreamPayload,
        api_key: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Post a completion request and return the decoded JSON body."""
        client = await self._get_client()

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key or ''}",
        }

        try:
            response = await client.post(
                self._url,
                headers=headers,
                json=payload.model_dump(),
            )
        except httpx.TimeoutException as e:
            raise UpstreamError(f"Completion request timed out: {e}", component="space")
        except httpx.RequestError as e:
            raise UpstreamError(f"Completion request failed: {e}", component="space")

        if not response.is_success:
            raise UpstreamError(
                f"Completion request failed with status: {response.status_code}",
                component="space",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamProtocolError(
                f"Completion response is not valid JSON: {e}",
                component="space",
            )
