"""
Message logger implementations.
"""

import logging
from typing import Optional
import httpx

from ..core.interface import MessageLogger, LogEntry
from ..core.errors import MessageLogError, UsageLimitError
from ..models.request import InboundLogEntry

logger = logging.getLogger(__name__)


class LoggingMessageLogger(MessageLogger):
    """Writes chat turns to the application log."""

    def __init__(self, level: int = logging.INFO):
        self.level = level

    async def log(self, entry: LogEntry) -> None:
        if isinstance(entry, InboundLogEntry):
            logger.log(
                self.level,
                f"user message chat={entry.chat_id} user={entry.user_id} "
                f"model={entry.model} chars={len(entry.content)} "
                f"attachments={len(entry.attachments or [])}",
            )
        else:
            for message in entry.messages:
                logger.log(
                    self.level,
                    f"{message.role} message chat={entry.chat_id} chars={len(message.content)}",
                )


class HttpMessageLogger(MessageLogger):
    """
    Posts chat turns to a conversation history service.

    User turns go to ``/messages/user`` and assistant turns to
    ``/messages/assistant``. A 429 answer carrying the code
    ``DAILY_LIMIT_REACHED`` means the user is over their daily allowance.
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the logger.

        Args:
            base_url: History service URL
            api_key: API key for authentication
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            headers = {"Content-Type": "application/json"}
            if self.api_key:
                headers["Authorization"] = f"Bearer {self.api_key}"
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def log(self, entry: LogEntry) -> None:
        path = "/messages/user" if isinstance(entry, InboundLogEntry) else "/messages/assistant"

        try:
            response = await self._get_client().post(
                path,
                json=entry.model_dump(by_alias=True, exclude_none=True),
            )
        except httpx.HTTPError as e:
            raise MessageLogError(f"Failed to reach history service: {e}", component="history")

        if response.status_code == 429 and self._error_code(response) == UsageLimitError.code:
            raise UsageLimitError(f"Daily message limit reached for chat {entry.chat_id}", component="history")

        if not response.is_success:
            raise MessageLogError(
                f"History service returned status {response.status_code} for {path}",
                component="history",
            )

    @staticmethod
    def _error_code(response: httpx.Response) -> Optional[str]:
        try:
            data = response.json()
        except ValueError:
            return None
        return data.get("code") if isinstance(data, dict) else None

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
