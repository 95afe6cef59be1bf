"""
REST API routes for the chat gateway.
"""

import logging
from typing import Optional, List, Dict

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from ..catalog import SUPPORTED_PROVIDERS
from ..core.gateway import ChatGateway
from ..core.interface import CredentialResolver
from ..core.registry import ModelRegistry
from ..models.descriptor import ModelDescriptor

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


# These will be set by the main app
_gateway: Optional[ChatGateway] = None
_registry: Optional[ModelRegistry] = None
_credential_resolver: Optional[CredentialResolver] = None


def set_dependencies(
    gateway: ChatGateway,
    registry: ModelRegistry,
    credential_resolver: CredentialResolver,
):
    """Set dependencies from main app."""
    global _gateway, _registry, _credential_resolver
    _gateway = gateway
    _registry = registry
    _credential_resolver = credential_resolver


async def _key_status(user_id: Optional[str]) -> Dict[str, bool]:
    """Per-provider flags telling whether the user configured their own key."""
    status = {provider: False for provider in SUPPORTED_PROVIDERS}
    if not user_id or not _credential_resolver:
        return status

    for provider in SUPPORTED_PROVIDERS:
        try:
            status[provider] = await _credential_resolver.has_key(user_id, provider)
        except Exception as e:
            logger.warning(f"Failed to check {provider} key for user {user_id}: {e}")
    return status


def _wire(models: List[ModelDescriptor]) -> List[dict]:
    return [m.to_wire() for m in models]


# Chat

@router.post("/chat")
async def chat(request: Request):
    """Forward a chat request to the completion service."""
    if not _gateway:
        raise HTTPException(status_code=503, detail="Service not ready")

    try:
        body = await request.json()
    except ValueError:
        # Reported by the gateway as a bad request
        body = None

    result = await _gateway.handle(body)
    return JSONResponse(status_code=result.status_code, content=result.body)


# Models

@router.get("/models")
async def list_models(user_id: Optional[str] = Query(default=None, alias="userId")):
    """
    List available models.

    Without a user, returns the models available to everyone. With a user,
    also includes the models of every provider they configured a key for.
    """
    if not _registry:
        raise HTTPException(status_code=503, detail="Service not ready")

    models = await _registry.get_all_with_access_flags()

    if user_id:
        status = await _key_status(user_id)
        providers = [p for p, has_key in status.items() if has_key]
        if providers:
            seen = {m.id for m in models}
            for model in await _registry.get_for_providers(providers):
                if model.id not in seen:
                    seen.add(model.id)
                    models.append(model)

    return {"models": _wire(models)}


@router.post("/models/refresh")
async def refresh_models():
    """Invalidate the model cache and fetch a fresh snapshot."""
    if not _registry:
        raise HTTPException(status_code=503, detail="Service not ready")

    _registry.invalidate()
    models = list(await _registry.get_all())

    logger.info(f"Model cache refreshed with {len(models)} models")
    return {"models": _wire(models), "refreshed": True}


# User keys

@router.get("/user-key-status")
async def user_key_status(user_id: Optional[str] = Query(default=None, alias="userId")):
    """Report which providers the user has configured their own key for."""
    return await _key_status(user_id)
