"""
Vault-backed credential resolver for per-user provider keys.
"""

import logging
from typing import Optional, Dict
import httpx

from ..core.interface import CredentialResolver
from ..core.errors import CredentialResolutionError

logger = logging.getLogger(__name__)


class VaultCredentialResolver(CredentialResolver):
    """
    Resolves provider API keys stored in HashiCorp Vault.

    A user's key for a provider lives at ``<prefix>/users/<user_id>/<provider>``
    under the ``api_key`` field. When the user has none, the service-wide
    fallback key for that provider is returned instead. Supports both KV v1
    and KV v2 secrets engines.
    """

    def __init__(
        self,
        addr: str = "http://localhost:8200",
        token: Optional[str] = None,
        namespace: Optional[str] = None,
        prefix: str = "secret/chat-gateway",
        kv_version: int = 2,
        fallback_keys: Optional[Dict[str, str]] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the resolver.

        Args:
            addr: Vault server address
            token: Vault token
            namespace: Vault namespace (Enterprise feature)
            prefix: Mount and base path for user secrets
            kv_version: KV secrets engine version (1 or 2)
            fallback_keys: Service-wide keys by provider family
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.addr = addr.rstrip("/")
        self.token = token
        self.namespace = namespace
        self.prefix = prefix.strip("/")
        self.kv_version = kv_version
        self.fallback_keys = fallback_keys or {}
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get HTTP client with Vault headers."""
        if self._client is None:
            headers = {}
            if self.token:
                headers["X-Vault-Token"] = self.token
            if self.namespace:
                headers["X-Vault-Namespace"] = self.namespace

            self._client = httpx.AsyncClient(
                base_url=self.addr,
                headers=headers,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    def _build_path(self, path: str) -> str:
        """Build the API path for KV operations."""
        # KV v2 inserts "data" after the mount (secret/data/path)
        if self.kv_version == 2:
            parts = path.split("/", 1)
            if len(parts) == 2:
                mount, subpath = parts
                return f"/v1/{mount}/data/{subpath}"
            return f"/v1/{path}/data"

        return f"/v1/{path}"

    def secret_path(self, user_id: str, provider: str) -> str:
        return f"{self.prefix}/users/{user_id}/{provider}"

    async def resolve(self, user_id: str, provider: str) -> Optional[str]:
        """Resolve the user's key for a provider, else the service-wide key."""
        user_key = await self._get_user_key(user_id, provider)
        if user_key:
            return user_key
        return self.fallback_keys.get(provider)

    async def has_key(self, user_id: str, provider: str) -> bool:
        """Whether the user stored their own key; fallback keys do not count."""
        return bool(await self._get_user_key(user_id, provider))

    async def _get_user_key(self, user_id: str, provider: str) -> Optional[str]:
        path = self.secret_path(user_id, provider)
        try:
            response = await self._get_client().get(self._build_path(path))
        except httpx.HTTPError as e:
            raise CredentialResolutionError(
                f"Failed to reach Vault for {provider} key: {e}",
                component="vault",
            )

        if response.status_code == 404:
            logger.debug(f"No {provider} key stored for user {user_id}")
            return None

        if not response.is_success:
            raise CredentialResolutionError(
                f"Vault returned status {response.status_code} for {path}",
                component="vault",
            )

        try:
            data = response.json()
        except ValueError as e:
            raise CredentialResolutionError(f"Vault returned invalid JSON: {e}", component="vault")

        if self.kv_version == 2:
            secrets = (data.get("data") or {}).get("data") or {}
        else:
            secrets = data.get("data") or {}

        return secrets.get("api_key") or None

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None


class StaticCredentialResolver(CredentialResolver):
    """Resolves every user to the service-wide key for the provider."""

    def __init__(self, keys: Optional[Dict[str, str]] = None):
        self.keys = keys or {}

    async def resolve(self, user_id: str, provider: str) -> Optional[str]:
        return self.keys.get(provider)

    async def has_key(self, user_id: str, provider: str) -> bool:
        return False
