"""
Configuration for the Chat Gateway service.

Settings come from environment variables and may be overridden by a YAML
file. Values of the form ``${VAR}`` inside the file are expanded from the
environment.
"""

import os
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

SYSTEM_PROMPT_DEFAULT = (
    "You are a thoughtful and clear assistant. Answer directly, explain your "
    "reasoning when it helps, and say so when you are not sure about something."
)

UPSTREAM_URL_DEFAULT = "https://mirxakamran893-logiqcurvecode.hf.space/chat"


def _env_float(name: str, default: str) -> float:
    return float(os.getenv(name, default))


def _env_int(name: str, default: str) -> int:
    return int(os.getenv(name, default))


@dataclass
class GatewaySettings:
    """Application configuration."""

    # Upstream completion service
    upstream_url: str = field(default_factory=lambda: os.getenv("UPSTREAM_URL", UPSTREAM_URL_DEFAULT))
    upstream_timeout_seconds: float = field(
        default_factory=lambda: _env_float("UPSTREAM_TIMEOUT_SECONDS", "55")
    )

    # Whole-request budget
    request_timeout_seconds: float = field(
        default_factory=lambda: _env_float("REQUEST_TIMEOUT_SECONDS", "60")
    )

    system_prompt_default: str = field(
        default_factory=lambda: os.getenv("SYSTEM_PROMPT_DEFAULT", SYSTEM_PROMPT_DEFAULT)
    )

    # Optional YAML model catalog; the built-in catalog is used when unset
    catalog_path: Optional[str] = field(default_factory=lambda: os.getenv("CATALOG_PATH") or None)

    # Vault (per-user provider keys)
    vault_addr: Optional[str] = field(default_factory=lambda: os.getenv("VAULT_ADDR") or None)
    vault_token: Optional[str] = field(default_factory=lambda: os.getenv("VAULT_TOKEN") or None)
    vault_namespace: Optional[str] = field(default_factory=lambda: os.getenv("VAULT_NAMESPACE") or None)
    vault_kv_version: int = field(default_factory=lambda: _env_int("VAULT_KV_VERSION", "2"))
    vault_prefix: str = field(default_factory=lambda: os.getenv("VAULT_PREFIX", "secret/chat-gateway"))

    # Service-wide fallback keys per provider
    openrouter_api_key: Optional[str] = field(default_factory=lambda: os.getenv("OPENROUTER_API_KEY") or None)

    # Conversation history service; messages are only logged locally when unset
    message_log_url: Optional[str] = field(default_factory=lambda: os.getenv("MESSAGE_LOG_URL") or None)
    message_log_api_key: Optional[str] = field(default_factory=lambda: os.getenv("MESSAGE_LOG_API_KEY") or None)

    # OpenTelemetry
    otel_endpoint: Optional[str] = field(
        default_factory=lambda: os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT") or None
    )

    # Server
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: _env_int("PORT", "8090"))

    def fallback_keys(self) -> Dict[str, str]:
        """Service-wide API keys by provider family."""
        keys = {}
        if self.openrouter_api_key:
            keys["openrouter"] = self.openrouter_api_key
        return keys


def _expand(value: Any) -> Any:
    """Expand ``${VAR}`` references from the environment."""
    if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
        return os.environ.get(value[2:-1], "")
    return value


def _parse_settings(data: Dict[str, Any]) -> GatewaySettings:
    settings = GatewaySettings()
    known = {f.name: f for f in fields(GatewaySettings)}

    for key, raw in data.items():
        if key not in known:
            logger.warning(f"Ignoring unknown config key: {key}")
            continue
        value = _expand(raw)
        current = getattr(settings, key)
        if value is not None and isinstance(current, (int, float)) and not isinstance(current, bool):
            value = type(current)(value)
        setattr(settings, key, value)

    return settings


def load_settings(config_path: Optional[str] = None) -> GatewaySettings:
    """
    Load settings, applying a YAML override file when one is found.

    Args:
        config_path: Path to config file. If None, uses CHAT_GATEWAY_CONFIG
            or the default locations.

    Returns:
        Loaded settings
    """
    if config_path is None:
        config_path = os.getenv("CHAT_GATEWAY_CONFIG")

    if config_path is None:
        paths = [
            Path("config/chat-gateway.yaml"),
            Path("/etc/chat-gateway/config.yaml"),
        ]
        for p in paths:
            if p.exists():
                config_path = str(p)
                break

    if config_path is None:
        return GatewaySettings()

    if not Path(config_path).exists():
        logger.warning(f"Config file {config_path} not found, using environment defaults")
        return GatewaySettings()

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError("top-level YAML value must be a mapping")
        return _parse_settings(data)

    except Exception as e:
        logger.error(f"Failed to load config from {config_path}: {e}")
        return GatewaySettings()
