"""
Chat Gateway Service

A FastAPI service that forwards chat requests to a completion backend:
- Per-user provider keys resolved from Vault
- System prompt merging and conversation logging
- Model registry with a five-minute cache and stale-serve on refresh failure
- Stable JSON error responses for every failure mode
"""

import logging
from typing import Optional
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from opentelemetry import trace
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.resources import Resource

from .config import GatewaySettings, load_settings
from .core.catalog import YamlCatalogSource
from .core.gateway import ChatGateway
from .core.interface import CredentialResolver, MessageLogger
from .core.registry import ModelRegistry
from .adapters import (
    SpaceAdapter,
    VaultCredentialResolver,
    StaticCredentialResolver,
    LoggingMessageLogger,
    HttpMessageLogger,
)
from .api.routes import router, set_dependencies

settings = load_settings()

# Configure logging
logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)


# Global resources
registry: Optional[ModelRegistry] = None
gateway: Optional[ChatGateway] = None


def setup_tracing(config: GatewaySettings) -> None:
    """Export spans over OTLP when an endpoint is configured."""
    if not config.otel_endpoint:
        return

    resource = Resource.create({"service.name": "chat-gateway"})
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=config.otel_endpoint, insecure=True))
    )
    trace.set_tracer_provider(provider)
    logger.info(f"Exporting traces to {config.otel_endpoint}")


def build_registry(config: GatewaySettings) -> ModelRegistry:
    if config.catalog_path:
        logger.info(f"Loading model catalog from {config.catalog_path}")
        return ModelRegistry(source=YamlCatalogSource(config.catalog_path))
    return ModelRegistry()


def build_credential_resolver(config: GatewaySettings) -> CredentialResolver:
    if config.vault_addr:
        return VaultCredentialResolver(
            addr=config.vault_addr,
            token=config.vault_token,
            namespace=config.vault_namespace,
            prefix=config.vault_prefix,
            kv_version=config.vault_kv_version,
            fallback_keys=config.fallback_keys(),
        )
    logger.warning("VAULT_ADDR not set, per-user provider keys are disabled")
    return StaticCredentialResolver(config.fallback_keys())


def build_message_logger(config: GatewaySettings) -> MessageLogger:
    if config.message_log_url:
        return HttpMessageLogger(
            base_url=config.message_log_url,
            api_key=config.message_log_api_key,
        )
    return LoggingMessageLogger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    global registry, gateway

    setup_tracing(settings)

    registry = build_registry(settings)
    credential_resolver = build_credential_resolver(settings)
    message_logger = build_message_logger(settings)
    upstream = SpaceAdapter(
        url=settings.upstream_url,
        timeout=settings.upstream_timeout_seconds,
    )

    gateway = ChatGateway(
        upstream=upstream,
        message_logger=message_logger,
        credential_resolver=credential_resolver,
        registry=registry,
        default_system_prompt=settings.system_prompt_default,
        timeout=settings.request_timeout_seconds,
    )
    set_dependencies(gateway, registry, credential_resolver)

    # Warm the cache
    models = await registry.get_all()
    logger.info(f"Chat gateway started with {len(models)} models")

    yield

    # Shutdown
    await upstream.close()
    await credential_resolver.close()
    await message_logger.close()
    logger.info("Chat gateway stopped")


app = FastAPI(
    title="Chat Gateway",
    description="Chat completion gateway with per-user provider keys and a cached model registry",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# OpenTelemetry instrumentation
FastAPIInstrumentor.instrument_app(app)

app.include_router(router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "chat-gateway",
        "models_cached": registry.is_cached if registry else False,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
